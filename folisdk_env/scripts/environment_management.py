"""
Snapshot and mutation of process environment variables.

A snapshot records, for each managed name, whether the variable was unset,
set to the empty string, or set to a value. Restoring puts back exactly that
state, removing variables that were unset. Both restoring and applying are
all-or-nothing: if the environment rejects a write, the writes already done
are reverted before the error is raised.
"""
import os
from collections import OrderedDict
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Mapping, MutableMapping, Optional, Type

from folisdk_env.core.errors import ApplyFailure, EnvironmentMutationError, RestoreFailure
from folisdk_env.core.logging import LoggingManager

_MUTATION_ERRORS = (OSError, ValueError, TypeError)


class VarKind(Enum):
    UNSET = "unset"
    EMPTY = "empty"
    VALUE = "value"


@dataclass(frozen=True)
class VarState:
    kind: VarKind
    value: Optional[str] = None

    @classmethod
    def of(cls, value: Optional[str]) -> "VarState":
        if value is None:
            return UNSET
        if value == "":
            return EMPTY
        return cls(VarKind.VALUE, value)

    @property
    def is_set(self) -> bool:
        return self.kind is not VarKind.UNSET

    def as_value(self) -> Optional[str]:
        """The string to export, or None when the variable must be removed."""
        if self.kind is VarKind.UNSET:
            return None
        if self.kind is VarKind.EMPTY:
            return ""
        return self.value


UNSET = VarState(VarKind.UNSET)
EMPTY = VarState(VarKind.EMPTY)

# name -> VarState, in capture order
VariableSet = Dict[str, VarState]


class EnvironmentManager:
    def __init__(self, environ: Optional[MutableMapping[str, str]] = None,
                 log_level: Optional[str] = None):
        self.environ = os.environ if environ is None else environ
        self.logger = LoggingManager(log_level)

    def capture(self, names: Iterable[str]) -> VariableSet:
        """Record the current state of each name, read at call time."""
        snapshot = OrderedDict()
        for name in names:
            snapshot[name] = VarState.of(self.environ.get(name))
        return snapshot

    def restore(self, snapshot: Mapping[str, VarState]):
        """Put every recorded variable back; raises RestoreFailure on a rejected write."""
        changes = OrderedDict((name, state.as_value()) for name, state in snapshot.items())
        self._mutate(changes, RestoreFailure)
        self.logger.debug(f"Restored {len(changes)} variables")

    def setup(self, env_vars: Mapping[str, str]):
        """Export every variable in env_vars; raises ApplyFailure on a rejected write."""
        self._mutate(OrderedDict(env_vars), ApplyFailure)
        self.logger.debug(f"Applied {len(env_vars)} variables")

    def _mutate(self, changes: Mapping[str, Optional[str]],
                error_cls: Type[EnvironmentMutationError]):
        previous = OrderedDict()
        for name, value in changes.items():
            previous[name] = self.environ.get(name)
            try:
                _write(self.environ, name, value)
            except _MUTATION_ERRORS as e:
                del previous[name]
                self._revert(previous)
                raise error_cls(f"Environment rejected update of {name}: {e}") from e

    def _revert(self, previous: Mapping[str, Optional[str]]):
        for name, value in reversed(list(previous.items())):
            try:
                _write(self.environ, name, value)
            except _MUTATION_ERRORS as e:
                self.logger.error(f"Could not revert {name} after a failed update: {e}")


def _write(environ: MutableMapping[str, str], name: str, value: Optional[str]):
    if value is None:
        environ.pop(name, None)
    else:
        environ[name] = value
