from collections import OrderedDict

import pytest

from folisdk_env.core.errors import StateCorrupted
from folisdk_env.modules import session_state
from folisdk_env.modules.activation import ActivationManager, ActivationState
from folisdk_env.scripts.environment_management import EMPTY, UNSET, VarState


def test_encode_decode():
    assert session_state.encode(UNSET) == "U"
    assert session_state.encode(EMPTY) == "E"
    assert session_state.encode(VarState.of("/usr/bin")) == "V/usr/bin"
    assert session_state.decode("U") is UNSET
    assert session_state.decode("E") is EMPTY
    assert session_state.decode("V$ ") == VarState.of("$ ")


@pytest.mark.parametrize("raw", ["", "V", "X", "value"])
def test_decode_rejects_unknown_tags(raw):
    with pytest.raises(StateCorrupted):
        session_state.decode(raw)


def test_store_and_load():
    environ = {"PATH": "/sdk/bin:/usr/bin"}
    state = ActivationState("x86_64", OrderedDict([("PATH", VarState.of("/usr/bin")), ("CC", UNSET)]))

    session_state.store(state, environ)

    assert environ == {
        "PATH": "/sdk/bin:/usr/bin",
        "FOLISDK_ACTIVE": "x86_64",
        "_OLD_FOLISDK_PATH": "V/usr/bin",
        "_OLD_FOLISDK_CC": "U",
    }
    loaded = session_state.load(environ)
    assert loaded.active == "x86_64"
    assert dict(loaded.snapshot) == {"CC": UNSET, "PATH": VarState.of("/usr/bin")}


def test_store_inactive_clears_everything():
    environ = {"FOLISDK_ACTIVE": "x86_64", "_OLD_FOLISDK_CC": "U", "HOME": "/home/dev"}
    session_state.store(ActivationState(), environ)
    assert environ == {"HOME": "/home/dev"}


def test_load_empty_environment():
    state = session_state.load({"PATH": "/usr/bin"})
    assert not state.is_active


def test_load_inconsistent_state():
    with pytest.raises(StateCorrupted):
        session_state.load({"_OLD_FOLISDK_CC": "U"})
    with pytest.raises(StateCorrupted):
        session_state.load({"FOLISDK_ACTIVE": "x86_64"})


def test_round_trip_across_invocations(split_locator, baseline):
    environ = dict(baseline)

    state = session_state.load(environ)
    ActivationManager(split_locator, state, environ).activate("x86_64")
    session_state.store(state, environ)
    assert environ["FOLISDK_ACTIVE"] == "x86_64"

    state = session_state.load(environ)
    ActivationManager(split_locator, state, environ).activate("i686")
    session_state.store(state, environ)
    assert environ["FOLISDK_ACTIVE"] == "i686"
    assert environ["_OLD_FOLISDK_PATH"] == "V/usr/bin"

    state = session_state.load(environ)
    ActivationManager(split_locator, state, environ).deactivate()
    session_state.store(state, environ)
    assert environ == baseline
