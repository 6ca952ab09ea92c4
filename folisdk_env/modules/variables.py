"""
Typed variable groups managed by an activation.

The navigation group (search path and prompt) is always applied; the
toolchain group only when the activation is not path-only.
"""
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator

TOOLCHAIN_NAMES: Tuple[str, ...] = (
    "CROSS_COMPILE", "CC", "CXX", "AS", "LD", "NM", "STRIP", "AR", "RANLIB",
    "SYSROOT", "PKG_CONFIG_DIR", "PKG_CONFIG_LIBDIR", "PKG_CONFIG_SYSROOT_DIR",
)
PROMPT_MARKER = "(folisdk-{arch}) "


class _Group(BaseModel):
    model_config = ConfigDict(frozen=True)

    @field_validator("*")
    @classmethod
    def _no_nul(cls, value: str) -> str:
        if "\0" in value:
            raise ValueError("environment values cannot contain NUL bytes")
        return value


class NavigationGroup(_Group):
    path: str
    prompt: str


class ToolchainGroup(_Group):
    cross_compile: str
    cc: str
    cxx: str
    as_: str
    ld: str
    nm: str
    strip: str
    ar: str
    ranlib: str
    sysroot: str
    pkg_config_dir: str
    pkg_config_libdir: str
    pkg_config_sysroot_dir: str

    @classmethod
    def for_triple(cls, triple: str, sysroot: str) -> "ToolchainGroup":
        return cls(
            cross_compile=f"{triple}-",
            cc=f"{triple}-gcc",
            cxx=f"{triple}-g++",
            as_=f"{triple}-as",
            ld=f"{triple}-ld",
            nm=f"{triple}-nm",
            strip=f"{triple}-strip",
            # static archives are built as relocatable objects, so ranlib is a no-op
            ar=f"{triple}-ld -r -o",
            ranlib="true",
            sysroot=sysroot,
            pkg_config_dir="",
            pkg_config_libdir=f"{sysroot}/usr/lib/pkgconfig:{sysroot}/usr/share/pkgconfig",
            pkg_config_sysroot_dir=sysroot,
        )

    def as_environ(self) -> Dict[str, str]:
        values = self.model_dump()
        return {name: values[_field_name(name)] for name in TOOLCHAIN_NAMES}


def _field_name(env_name: str) -> str:
    field = env_name.lower()
    return "as_" if field == "as" else field


class TargetVariables(BaseModel):
    """The complete set of variables one activation writes."""

    model_config = ConfigDict(frozen=True)

    navigation: NavigationGroup
    toolchain: Optional[ToolchainGroup] = None
    prompt_var: str = "PS1"

    def names(self) -> List[str]:
        return list(self.as_environ())

    def as_environ(self) -> Dict[str, str]:
        env = {"PATH": self.navigation.path, self.prompt_var: self.navigation.prompt}
        if self.toolchain is not None:
            env.update(self.toolchain.as_environ())
        return env


def prepend_path(bin_dirs, current: Optional[str], pathsep: str = ":") -> str:
    parts = [str(d) for d in bin_dirs]
    if current:
        parts.append(current)
    return pathsep.join(parts)


def prefix_prompt(arch: str, current: Optional[str]) -> str:
    return PROMPT_MARKER.format(arch=arch) + (current or "")
