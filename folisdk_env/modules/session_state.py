"""
Carry an ActivationState in environment variables between CLI invocations.

The shell evaluates what the CLI prints, so the only place state can live
between ``folisdk activate`` and ``folisdk deactivate`` is the shell's own
environment. The active architecture goes in ``FOLISDK_ACTIVE`` and each
snapshotted variable gets a ``_OLD_FOLISDK_<NAME>`` backup whose first
character tags the recorded state:

    U          the variable was unset
    E          the variable was set to the empty string
    V<value>   the variable was set to <value>
"""
from collections import OrderedDict
from typing import MutableMapping

from folisdk_env.core.errors import StateCorrupted
from folisdk_env.modules.activation import ActivationState
from folisdk_env.scripts.environment_management import EMPTY, UNSET, VarKind, VarState

MARKER = "FOLISDK_ACTIVE"
BACKUP_PREFIX = "_OLD_FOLISDK_"

_TAGS = {VarKind.UNSET: "U", VarKind.EMPTY: "E", VarKind.VALUE: "V"}


def encode(state: VarState) -> str:
    if state.kind is VarKind.VALUE:
        return "V" + state.value
    return _TAGS[state.kind]


def decode(raw: str) -> VarState:
    if raw == "U":
        return UNSET
    if raw == "E":
        return EMPTY
    if raw.startswith("V") and len(raw) > 1:
        return VarState(VarKind.VALUE, raw[1:])
    raise StateCorrupted(f"Unrecognized backup value: {raw!r}")


def backup_name(name: str) -> str:
    return BACKUP_PREFIX + name


def load(environ: MutableMapping[str, str]) -> ActivationState:
    """Rebuild the activation state recorded in environ."""
    active = environ.get(MARKER) or None
    snapshot = OrderedDict()
    for key in sorted(environ):
        if key.startswith(BACKUP_PREFIX):
            snapshot[key[len(BACKUP_PREFIX):]] = decode(environ[key])
    if active is None and snapshot:
        raise StateCorrupted(
            f"Found {BACKUP_PREFIX}* backups but {MARKER} is not set; "
            f"unset them or start a new shell")
    if active is not None and not snapshot:
        raise StateCorrupted(f"{MARKER}={active} but no saved environment was found")
    if active is None:
        return ActivationState()
    return ActivationState(active, snapshot)


def store(state: ActivationState, environ: MutableMapping[str, str]):
    """Write state into environ, dropping backups of any earlier activation."""
    for key in [k for k in environ if k.startswith(BACKUP_PREFIX)]:
        del environ[key]
    environ.pop(MARKER, None)
    if not state.is_active:
        return
    for name, var_state in state.snapshot.items():
        environ[backup_name(name)] = encode(var_state)
    environ[MARKER] = state.active
