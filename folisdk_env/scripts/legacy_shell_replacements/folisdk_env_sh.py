# Replacement for share/folisdk/folisdk-env.sh.
# The shell functions only evaluate what the folisdk CLI prints; all of the
# activation logic lives in Python. Source it from ~/.zshrc or ~/.bash_profile:
#
#     eval "$(folisdk shell-hook)"
#
# Prompt variables are usually shell-local, so each function exports the
# prompt into the CLI's subshell, and only when it is set: an unset prompt
# must reach the CLI as unset, not as empty.
import sys

HOOK_TEMPLATE = """\
# ==========================================
# foliSDK Environment Manager
# ==========================================

folisdk_activate() {{
    local __folisdk_out
    __folisdk_out="$(if [ -n "${{{prompt}+x}}" ]; then export {prompt}; fi
        command {exe} activate "$@")" || return $?
    eval "$__folisdk_out"
}}

folisdk_deactivate() {{
    local __folisdk_out
    __folisdk_out="$(if [ -n "${{{prompt}+x}}" ]; then export {prompt}; fi
        command {exe} deactivate)" || return $?
    eval "$__folisdk_out"
}}
"""


def render_hook(exe: str = "folisdk", prompt_var: str = "PS1") -> str:
    return HOOK_TEMPLATE.format(exe=exe, prompt=prompt_var)


def main():
    exe = sys.argv[1] if len(sys.argv) > 1 else "folisdk"
    prompt_var = sys.argv[2] if len(sys.argv) > 2 else "PS1"
    sys.stdout.write(render_hook(exe, prompt_var))


if __name__ == '__main__':
    main()
