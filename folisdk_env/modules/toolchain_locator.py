"""
Toolchain locator for foliSDK installs.

Maps an architecture id onto the directories of an installed SDK. Two
install layouts exist:

``split``
    A host keg (``folisdk-host``) holding the shared utilities plus one keg
    per architecture (``folisdk-<arch>``), side by side under the install
    root. Both bin directories go on PATH, host first.

``unified``
    A single keg under the install root containing every architecture's
    toolchain in one bin directory, with one ``<triple>/sysroot`` per arch.

Nothing here is cached: every ``resolve`` re-checks the filesystem.
"""
import re
from pathlib import Path
from typing import List, Optional

from folisdk_env.core.errors import InvalidArgument, ToolchainNotFound
from folisdk_env.core.logging import LoggingManager
from folisdk_env.scripts.config_parsing import SdkConfig

ARCH_PATTERN = re.compile(r"[A-Za-z0-9_]+")
HOST_KEG = "folisdk-host"
ARCH_KEG = "folisdk-{arch}"


class ArchitectureDescriptor:
    """Resolved locations for one architecture."""

    def __init__(self, arch: str, triple: str, prefix: Path, bin_dirs: List[Path], sysroot: Path):
        self.arch = arch
        self.triple = triple
        self.prefix = prefix
        self.bin_dirs = list(bin_dirs)
        self.sysroot = sysroot

    @property
    def bin_dir(self) -> Path:
        """The architecture-specific bin directory (last on the list)."""
        return self.bin_dirs[-1]

    def __repr__(self):
        return f"ArchitectureDescriptor(arch={self.arch!r}, triple={self.triple!r}, bin_dirs={self.bin_dirs!r})"


class ToolchainLocator:
    def __init__(self, config: Optional[SdkConfig] = None, log_level: Optional[str] = None):
        self.config = config or SdkConfig()
        self.logger = LoggingManager(log_level)

    @property
    def root(self) -> Path:
        return Path(self.config.install_root)

    def triple(self, arch: str) -> str:
        return f"{arch}-{self.config.vendor}-{self.config.os}"

    def validate_arch(self, arch: Optional[str]) -> str:
        if not arch:
            raise InvalidArgument("Error: No architecture specified")
        if not ARCH_PATTERN.fullmatch(arch):
            raise InvalidArgument(f"Error: Invalid architecture name: {arch!r}")
        allowed = self.config.architectures
        if allowed and arch not in allowed:
            raise InvalidArgument(
                f"Error: Unsupported architecture {arch!r} (expected one of: {', '.join(allowed)})")
        return arch

    def resolve(self, arch: str) -> ArchitectureDescriptor:
        """
        Resolve the install locations of an architecture.
        Args:
            arch (str): Architecture id, e.g. ``x86_64``.
        Returns:
            ArchitectureDescriptor: bin dirs in PATH order, sysroot and triple.
        Raises:
            InvalidArgument: arch is empty, malformed, or not allowed.
            ToolchainNotFound: the expected directories are missing.
        """
        arch = self.validate_arch(arch)
        if self.config.layout == "unified":
            descriptor = self._resolve_unified(arch)
        else:
            descriptor = self._resolve_split(arch)
        self.logger.debug(f"Resolved {descriptor!r}")
        return descriptor

    def _resolve_split(self, arch: str) -> ArchitectureDescriptor:
        triple = self.triple(arch)
        host_prefix = self.root / HOST_KEG
        arch_prefix = self.root / ARCH_KEG.format(arch=arch)
        host_bin = host_prefix / "bin"
        arch_bin = arch_prefix / "bin"
        if not host_bin.is_dir():
            raise ToolchainNotFound(
                f"Error: foliSDK is improperly installed (missing {host_bin})", host_bin)
        if not arch_bin.is_dir():
            raise ToolchainNotFound(f"Error: foliSDK not found at {arch_prefix}", arch_prefix)
        return ArchitectureDescriptor(arch, triple, arch_prefix, [host_bin, arch_bin],
                                      arch_prefix / triple / "sysroot")

    def _resolve_unified(self, arch: str) -> ArchitectureDescriptor:
        triple = self.triple(arch)
        prefix = self.root
        sdk_bin = prefix / "bin"
        if not sdk_bin.is_dir():
            raise ToolchainNotFound(f"Error: foliSDK not found at {prefix}", prefix)
        if not (prefix / triple).is_dir():
            raise ToolchainNotFound(
                f"Error: foliSDK for {arch} not found at {prefix / triple}", prefix / triple)
        return ArchitectureDescriptor(arch, triple, prefix, [sdk_bin], prefix / triple / "sysroot")

    def list_installed(self) -> List[str]:
        """Architectures whose toolchain is present on disk, sorted."""
        suffix = f"-{self.config.vendor}-{self.config.os}"
        found = set()
        if self.config.layout == "unified":
            if (self.root / "bin").is_dir():
                for child in self.root.iterdir():
                    if child.is_dir() and child.name.endswith(suffix):
                        found.add(child.name[: -len(suffix)])
        elif (self.root / HOST_KEG / "bin").is_dir():
            for child in self.root.glob(ARCH_KEG.format(arch="*")):
                arch = child.name[len("folisdk-"):]
                if arch != "host" and (child / "bin").is_dir():
                    found.add(arch)
        return sorted(a for a in found if ARCH_PATTERN.fullmatch(a))
