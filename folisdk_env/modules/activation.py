"""
Activation manager for foliSDK toolchains.

``activate`` overlays the toolchain variables for one architecture onto an
environment and ``deactivate`` puts back exactly what was there before.
At most one activation is live at a time: activating while already active
first deactivates, so the snapshot always holds the true baseline.
"""
import os
from typing import MutableMapping, Optional, Sequence, Tuple

from folisdk_env.core.errors import ApplyFailure, InvalidArgument, NotActive
from folisdk_env.core.logging import LoggingManager
from folisdk_env.modules.toolchain_locator import ArchitectureDescriptor, ToolchainLocator
from folisdk_env.modules.variables import (
    NavigationGroup,
    TargetVariables,
    ToolchainGroup,
    prefix_prompt,
    prepend_path,
)
from folisdk_env.scripts.environment_management import EnvironmentManager, VariableSet

PATH_ONLY_FLAG = "--path-only"
ARCH_FLAG = "--arch"


class ActivationState:
    """Which architecture is active and the baseline captured for it."""

    def __init__(self, active: Optional[str] = None, snapshot: Optional[VariableSet] = None):
        if (active is None) != (snapshot is None):
            raise ValueError("active and snapshot must both be set or both be None")
        self.active = active
        self.snapshot = snapshot

    @property
    def is_active(self) -> bool:
        return self.active is not None

    def set(self, active: str, snapshot: VariableSet):
        self.active = active
        self.snapshot = snapshot

    def clear(self):
        self.active = None
        self.snapshot = None

    def __repr__(self):
        return f"ActivationState(active={self.active!r})"


class ActivationResult:
    def __init__(self, descriptor: ArchitectureDescriptor, path_only: bool,
                 deactivated: Optional[str] = None):
        self.descriptor = descriptor
        self.path_only = path_only
        self.deactivated = deactivated

    @property
    def arch(self) -> str:
        return self.descriptor.arch

    @property
    def message(self) -> str:
        return f"Activated foliSDK for architecture: {self.arch}"


def parse_activation_args(tokens: Sequence[str],
                          default_arch: Optional[str] = None) -> Tuple[str, bool]:
    """
    Parse ``activate`` arguments in either accepted form.
    Accepts a bare architecture token, ``--arch=<arch>`` or ``--arch <arch>``,
    and ``--path-only``, in any order.
    Returns:
        tuple: (arch, path_only)
    Raises:
        InvalidArgument: unknown flag, conflicting architectures, or no
        architecture and no configured default.
    """
    arch = None
    path_only = False
    pending = list(tokens)
    while pending:
        token = pending.pop(0)
        if token == PATH_ONLY_FLAG:
            path_only = True
            continue
        if token == ARCH_FLAG:
            if not pending:
                raise InvalidArgument("Error: --arch requires a value")
            value = pending.pop(0)
        elif token.startswith(ARCH_FLAG + "="):
            value = token.split("=", 1)[1]
        elif token.startswith("-"):
            raise InvalidArgument(f"Error: Unrecognized option: {token}")
        else:
            value = token
        if not value:
            raise InvalidArgument("Error: No architecture specified")
        if arch is not None and value != arch:
            raise InvalidArgument(f"Error: Conflicting architectures: {arch}, {value}")
        arch = value
    arch = arch or default_arch
    if not arch:
        raise InvalidArgument("Error: No architecture specified")
    return arch, path_only


class ActivationManager:
    def __init__(self, locator: ToolchainLocator, state: Optional[ActivationState] = None,
                 environ: Optional[MutableMapping[str, str]] = None,
                 prompt_var: Optional[str] = None, log_level: Optional[str] = None):
        self.locator = locator
        self.state = state if state is not None else ActivationState()
        self.environ = os.environ if environ is None else environ
        self.prompt_var = prompt_var or locator.config.prompt_var
        self.env = EnvironmentManager(self.environ, log_level)
        self.logger = LoggingManager(log_level)

    def activate(self, arch: str, path_only: bool = False) -> ActivationResult:
        """
        Overlay the toolchain environment for arch.
        The toolchain is resolved before anything is touched, so a missing
        install leaves both the environment and the state unchanged.
        """
        descriptor = self.locator.resolve(arch)

        deactivated = None
        if self.state.is_active:
            deactivated = self.deactivate()

        target = self.compute_target(descriptor, path_only)
        snapshot = self.env.capture(target.names())
        try:
            self.env.setup(target.as_environ())
        except ApplyFailure:
            self.logger.error(f"Activation of {descriptor.arch} failed, environment left as before")
            raise
        self.state.set(descriptor.arch, snapshot)
        self.logger.info(f"Activated {descriptor.arch} (path_only={path_only})")
        return ActivationResult(descriptor, path_only, deactivated)

    def deactivate(self) -> str:
        """Restore the baseline snapshot. Returns the architecture that was active."""
        if not self.state.is_active:
            raise NotActive()
        arch = self.state.active
        self.env.restore(self.state.snapshot)
        self.state.clear()
        self.logger.info(f"Deactivated {arch}")
        return arch

    def compute_target(self, descriptor: ArchitectureDescriptor, path_only: bool) -> TargetVariables:
        navigation = NavigationGroup(
            path=prepend_path(descriptor.bin_dirs, self.environ.get("PATH"), os.pathsep),
            prompt=prefix_prompt(descriptor.arch, self.environ.get(self.prompt_var)),
        )
        toolchain = None
        if not path_only:
            toolchain = ToolchainGroup.for_triple(descriptor.triple, str(descriptor.sysroot))
        return TargetVariables(navigation=navigation, toolchain=toolchain, prompt_var=self.prompt_var)
