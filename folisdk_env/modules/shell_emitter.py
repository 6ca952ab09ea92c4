"""
Render environment changes as POSIX shell commands for ``eval``.
"""
from collections import OrderedDict
from typing import Dict, Iterable, List, Mapping, Tuple


def diff(before: Mapping[str, str], after: Mapping[str, str]) -> Tuple[Dict[str, str], List[str]]:
    """
    Compute what turns before into after.
    Returns:
        tuple: (exports in the order they appear in after, sorted unsets)
    """
    exports = OrderedDict()
    for name, value in after.items():
        if before.get(name) != value:
            exports[name] = value
    unsets = sorted(name for name in before if name not in after)
    return exports, unsets


def quote(value: str) -> str:
    return "'" + value.replace("'", "'\"'\"'") + "'"


def render(exports: Mapping[str, str], unsets: List[str], shell_local: Iterable[str] = ()) -> str:
    """Names in shell_local are assigned without export, keeping their export flag as is."""
    shell_local = set(shell_local)
    lines = [f"unset {name}" for name in unsets]
    for name, value in exports.items():
        keyword = "" if name in shell_local else "export "
        lines.append(f"{keyword}{name}={quote(value)}")
    return "\n".join(lines) + ("\n" if lines else "")
