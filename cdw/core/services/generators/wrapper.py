"""
Wrapper function generator — the shell side of the cd signal protocol.

Every wrapper follows the same two-invocation contract:

    1. Run the real ``cdw`` with stdout captured.
    2. Exit 0 and first character BEL  →  cd into the rest of the line.
    3. Anything else                   →  run the real ``cdw`` again,
                                          uncaptured, so the user sees
                                          its output and exit status.

The POSIX dialects (bash, zsh, ksh, sh) share one body.
"""

from __future__ import annotations

from cdw.core.models.shell import SHELL_PROFILES, ShellKind
from cdw.core.models.template import GeneratedFile

UNSUPPORTED = "# Unsupported shell\n"

_POSIX = r"""
cdw() {
    local cmd_output exit_status
    cmd_output=$(command cdw "$@")
    exit_status=$?
    if [ $exit_status -eq 0 ]; then
        first_char=$(echo -n "$cmd_output" | cut -c1)
        if [ "$(printf '%d' "'$first_char")" -eq 7 ]; then
            cd "${cmd_output#?}"
        else
            command cdw "$@"
        fi
    else
        command cdw "$@"
        return $exit_status
    fi
}
"""

_FISH = r"""
function cdw
    set cmd_output (command cdw $argv | string escape)
    set exit_status $status
    if test $exit_status -eq 0
        if string match -q "\cg*" -- "$cmd_output"
            cd (string sub -s 4 -- "$cmd_output")
        else
            command cdw $argv
        end
    else
        command cdw $argv
        return $exit_status
    end
end

# Override the help function to preserve formatting
function __fish_cdw_help
    command cdw --help
end

# Set up completion to use the custom help function
complete -c cdw -f -a "(__fish_cdw_help | string match -r '^  [^ ].*')"
"""

_XONSH = r"""
def cdw(args):
    import subprocess
    try:
        cmd_output = subprocess.check_output(['cdw'] + args, text=True)
        if cmd_output.startswith('\a'):
            %cd @(cmd_output[1:].strip())
        else:
            print(cmd_output, end='')
    except subprocess.CalledProcessError as e:
        print(e.output, end='')
        return e.returncode
"""

_NUSHELL = r"""#!/usr/bin/env nu

def --wrapped --env cdw [...args: string] {
    let cmd_output = ^cdw ...$args
    if ($env.LAST_EXIT_CODE == 0) and ($cmd_output | str starts-with "\u{7}") {
        cd ($cmd_output | str substring 1..)
    } else {
        print $cmd_output
    }
}
"""

_PWSH = r"""#!/usr/bin/env pwsh

function cdw {
    $cmd_output =  & (Get-Command -Name cdw -CommandType Application).Definition[0] $args
    if ($LASTEXITCODE -eq 0) {
        if ($cmd_output.StartsWith("`a")) {
            Set-Location $cmd_output.Substring(1)
        } else {
            $cmd_output
        }
    } else {
        $cmd_output
        $LASTEXITCODE = 1
    }
}
"""

WRAPPERS: dict[ShellKind, str] = {
    ShellKind.BASH: _POSIX,
    ShellKind.ZSH: _POSIX,
    ShellKind.KSH: _POSIX,
    ShellKind.SH: _POSIX,
    ShellKind.FISH: _FISH,
    ShellKind.XONSH: _XONSH,
    ShellKind.NUSHELL: _NUSHELL,
    ShellKind.POWERSHELL: _PWSH,
}


def file_extension(shell: ShellKind | str) -> str:
    """Extension used for this shell's installed files."""
    if isinstance(shell, ShellKind):
        return SHELL_PROFILES[shell].extension
    return shell


def wrapper_source(shell: ShellKind | str) -> str:
    """Wrapper function source, or a comment for unknown shells."""
    if isinstance(shell, ShellKind):
        return WRAPPERS[shell]
    return UNSUPPORTED


def generate_wrapper(shell: ShellKind | str) -> GeneratedFile:
    """Generate ``function.<ext>`` for ``shell``."""
    return GeneratedFile(
        path=f"function.{file_extension(shell)}",
        content=wrapper_source(shell),
        reason=f"cdw wrapper function for {shell}",
    )
