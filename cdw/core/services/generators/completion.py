"""
Completion script generator — tab completion for the cdw flags.

Completes the option names, the shell names after ``--init-display``,
and falls back to file names for the path argument.
"""

from __future__ import annotations

from cdw.core.models.shell import ShellKind
from cdw.core.models.template import GeneratedFile
from cdw.core.services.generators.wrapper import file_extension

UNSUPPORTED = "# Autocomplete not supported for this shell\n"

_ZSH = r"""
#compdef cdw

_cdw() {
    local curcontext="$curcontext" state line
    typeset -A opt_args

    _arguments -C \
        '-i[Initialize shell function]' \
        '--init[Initialize shell function]' \
        '-v[Enable verbose mode]' \
        '--verbose[Enable verbose mode]' \
        '-c[Convert path without changing directory]' \
        '--convert[Convert path without changing directory]' \
        '--init-all[Initialize shell function for all available shells]' \
        '--init-display[Display shell function]:shell:(bash zsh fish pwsh nushell xonsh ksh sh)' \
        '*:filename:_files'
}

compdef _cdw cdw
"""

_BASH = r"""
_cdw_autocomplete() {
    local cur prev opts
    COMPREPLY=()
    cur="${COMP_WORDS[COMP_CWORD]}"
    prev="${COMP_WORDS[COMP_CWORD-1]}"
    opts="-i --init -v --verbose -c --convert --init-all --init-display"

    if [[ ${cur} == -* ]] ; then
        COMPREPLY=( $(compgen -W "${opts}" -- ${cur}) )
        return 0
    fi

    if [[ ${prev} == "--init-display" ]] ; then
        COMPREPLY=( $(compgen -W "bash zsh fish pwsh nushell xonsh ksh sh" -- ${cur}) )
        return 0
    fi

    COMPREPLY=( $(compgen -f ${cur}) )
    return 0
}
complete -F _cdw_autocomplete cdw
"""

_FISH = r"""
function _cdw_autocomplete
    set -l cmd (commandline -opc)
    set -l cur (commandline -ct)
    set -l opts -i --init -v --verbose -c --convert --init-all --init-display

    if string match -q -- '-*' $cur
        printf '%s\n' $opts
    else if test (count $cmd) -gt 1; and test "$cmd[-1]" = "--init-display"
        printf '%s\n' bash zsh fish pwsh nushell xonsh ksh sh
    else
        __fish_complete_path $cur
    end
end

complete -f -c cdw -a '(_cdw_autocomplete)'
"""

_PWSH = r"""
Register-ArgumentCompleter -Native -CommandName cdw -ScriptBlock {
    param($wordToComplete, $commandAst, $cursorPosition)
    $opts = @('-i', '--init', '-v', '--verbose', '-c', '--convert', '--init-all', '--init-display')
    $shells = @('bash', 'zsh', 'fish', 'pwsh', 'nushell', 'xonsh', 'ksh', 'sh')

    if ($wordToComplete -match '^-') {
        return $opts | Where-Object { $_ -like "$wordToComplete*" }
    }

    if ($commandAst.CommandElements.Count -gt 2 -and $commandAst.CommandElements[-2] -eq '--init-display') {
        return $shells | Where-Object { $_ -like "$wordToComplete*" }
    }

    return Get-ChildItem -Path $wordToComplete* | Select-Object -ExpandProperty FullName
}
"""

_NUSHELL = r"""
def "nu-complete cdw" [] {
    let opts = ['-i' '--init' '-v' '--verbose' '-c' '--convert' '--init-all' '--init-display']
    let shells = ['bash' 'zsh' 'fish' 'pwsh' 'nushell' 'xonsh' 'ksh' 'sh']
    let input = ($in | str trim)

    if ($input | str starts-with '-') {
        $opts | where { $it | str starts-with $input }
    } else if ($input == '' or $input == '--init-display') {
        $shells
    } else {
        ls ($input + '*') | get name
    }
}

def "cdw completions" [] {
    [
        {name: 'path', type: 'string', description: 'Windows path to change directory to', template: 'nu-complete cdw'},
        {name: '--init', shorthand: '-i', type: 'switch', description: 'Initialize shell function'},
        {name: '--init-all', type: 'switch', description: 'Initialize shell function for all available shells'},
        {name: '--init-display', type: 'string', description: 'Display shell function', template: 'nu-complete cdw'},
        {name: '--verbose', shorthand: '-v', type: 'switch', description: 'Enable verbose mode'},
        {name: '--convert', shorthand: '-c', type: 'switch', description: 'Convert path without changing directory'}
    ]
}

export extern cdw [...args: string@'cdw completions']
"""

_XONSH = r"""
def _cdw_completer(prefix, line, begidx, endidx, ctx):
    opts = ['-i', '--init', '-v', '--verbose', '-c', '--convert', '--init-all', '--init-display']
    shells = ['bash', 'zsh', 'fish', 'pwsh', 'nushell', 'xonsh', 'ksh', 'sh']

    if prefix.startswith('-'):
        return [o for o in opts if o.startswith(prefix)]
    elif len(line.split()) > 2 and line.split()[-2] == '--init-display':
        return [s for s in shells if s.startswith(prefix)]
    else:
        return [p for p in __xonsh__.subproc_captured(['ls', '-d', f'{prefix}*']).splitlines()]

completer add cdw _cdw_completer
"""

# ksh and sh have no programmable completion.
COMPLETIONS: dict[ShellKind, str] = {
    ShellKind.ZSH: _ZSH,
    ShellKind.BASH: _BASH,
    ShellKind.FISH: _FISH,
    ShellKind.POWERSHELL: _PWSH,
    ShellKind.NUSHELL: _NUSHELL,
    ShellKind.XONSH: _XONSH,
}


def completion_source(shell: ShellKind | str) -> str:
    """Completion script source, or a comment if the shell has none."""
    if isinstance(shell, ShellKind):
        return COMPLETIONS.get(shell, UNSUPPORTED)
    return UNSUPPORTED


def generate_completion(shell: ShellKind | str) -> GeneratedFile:
    """Generate ``autocomplete.<ext>`` for ``shell``."""
    return GeneratedFile(
        path=f"autocomplete.{file_extension(shell)}",
        content=completion_source(shell),
        reason=f"cdw tab completion for {shell}",
    )
