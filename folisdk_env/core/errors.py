"""
Error taxonomy for the foliSDK environment manager.

Every error is local to one command invocation and carries the exit code the
CLI reports for it. Nothing is retried.
"""


class FolisdkError(Exception):
    exit_code = 1


class NotActive(FolisdkError):
    """Deactivate was requested while no activation is in effect."""

    exit_code = 1

    def __init__(self, message: str = "foliSDK is not currently active."):
        super().__init__(message)


class InvalidArgument(FolisdkError):
    """Bad or missing architecture, or an unrecognized flag."""

    exit_code = 2


class ToolchainNotFound(FolisdkError):
    """The resolved toolchain directories do not exist on disk."""

    exit_code = 3

    def __init__(self, message: str, path=None):
        super().__init__(message)
        self.path = path


class EnvironmentMutationError(FolisdkError):
    exit_code = 4


class RestoreFailure(EnvironmentMutationError):
    """The host rejected a mutation while restoring a snapshot."""


class ApplyFailure(EnvironmentMutationError):
    """The host rejected a mutation while applying a new activation."""


class StateCorrupted(EnvironmentMutationError):
    """Activation state carried in the environment cannot be decoded."""


class ConfigError(FolisdkError):
    exit_code = 5
