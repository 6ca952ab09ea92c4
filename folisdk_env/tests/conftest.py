"""
Shared fixtures: fake SDK install trees and a baseline environment.
"""
from pathlib import Path

import pytest

from folisdk_env.modules.toolchain_locator import ToolchainLocator
from folisdk_env.scripts.config_parsing import SdkConfig

ARCHS = ("x86_64", "i686")


def make_split_install(root: Path, archs=ARCHS) -> Path:
    (root / "folisdk-host" / "bin").mkdir(parents=True)
    for arch in archs:
        keg = root / f"folisdk-{arch}"
        (keg / "bin").mkdir(parents=True)
        (keg / f"{arch}-strata-folios" / "sysroot").mkdir(parents=True)
    return root


def make_unified_install(root: Path, archs=ARCHS) -> Path:
    (root / "bin").mkdir(parents=True)
    for arch in archs:
        (root / f"{arch}-strata-folios" / "sysroot").mkdir(parents=True)
    return root


@pytest.fixture
def split_root(tmp_path: Path) -> Path:
    return make_split_install(tmp_path / "opt")


@pytest.fixture
def unified_root(tmp_path: Path) -> Path:
    return make_unified_install(tmp_path / "folisdk")


@pytest.fixture
def split_locator(split_root: Path) -> ToolchainLocator:
    return ToolchainLocator(SdkConfig(install_root=split_root, layout="split"))


@pytest.fixture
def unified_locator(unified_root: Path) -> ToolchainLocator:
    return ToolchainLocator(SdkConfig(install_root=unified_root, layout="unified"))


@pytest.fixture
def baseline() -> dict:
    return {"PATH": "/usr/bin", "PS1": "$ ", "HOME": "/home/dev"}
