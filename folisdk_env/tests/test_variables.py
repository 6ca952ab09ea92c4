import pytest
from pydantic import ValidationError

from folisdk_env.modules.variables import (
    TOOLCHAIN_NAMES,
    NavigationGroup,
    TargetVariables,
    ToolchainGroup,
    prefix_prompt,
    prepend_path,
)


def test_toolchain_group_uses_environment_names():
    env = ToolchainGroup.for_triple("x86_64-strata-folios", "/sdk/sysroot").as_environ()
    assert tuple(env) == TOOLCHAIN_NAMES
    assert env["AS"] == "x86_64-strata-folios-as"
    assert env["NM"] == "x86_64-strata-folios-nm"
    assert env["STRIP"] == "x86_64-strata-folios-strip"


def test_target_without_toolchain_has_navigation_only():
    target = TargetVariables(navigation=NavigationGroup(path="/sdk/bin", prompt="(folisdk-i686) "),
                             prompt_var="PROMPT")
    assert target.as_environ() == {"PATH": "/sdk/bin", "PROMPT": "(folisdk-i686) "}


def test_nul_bytes_rejected():
    with pytest.raises(ValidationError):
        NavigationGroup(path="/sdk\0/bin", prompt="")


def test_path_and_prompt_helpers():
    assert prepend_path(["/a", "/b"], "/usr/bin") == "/a:/b:/usr/bin"
    assert prepend_path(["/a"], "") == "/a"
    assert prefix_prompt("x86_64", None) == "(folisdk-x86_64) "
    assert prefix_prompt("x86_64", "$ ") == "(folisdk-x86_64) $ "
