from folisdk_env.core.logging import LoggingManager


def test_logging_manager(capsys):
    manager = LoggingManager(log_level="DEBUG")
    manager.setup()
    manager.debug("Debug message")
    manager.info("Info message")
    manager.warning("Warning message")
    manager.error("Error message")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "DEBUG: Debug message" in captured.err
    assert "ERROR: Error message" in captured.err


def test_level_from_environment(monkeypatch):
    monkeypatch.setenv("FOLISDK_LOG_LEVEL", "info")
    assert LoggingManager().log_level == "INFO"
    assert LoggingManager("error").log_level == "ERROR"


def test_default_level(monkeypatch):
    monkeypatch.delenv("FOLISDK_LOG_LEVEL", raising=False)
    assert LoggingManager().log_level == "WARNING"
