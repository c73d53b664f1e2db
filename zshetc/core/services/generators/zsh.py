"""
zsh startup file generator — /etc/zshenv, /etc/zprofile, /etc/zshrc.

Pure functions: options, fragments and system environment in, text out.
Every file is guarded against being sourced twice and ends by sourcing
``<path>.local`` when that file exists at shell start-up.

Blocks gated by a toggle leave an empty line in place when the toggle
is off, so switching one toggle never moves or alters any other block.
"""

from __future__ import annotations

import shlex

from zshetc.core.data.known_hashes import (
    ENV,
    INTERACTIVE_RC,
    LOGIN_PROFILE,
    known_hashes,
)
from zshetc.core.models.fragments import FZF_COMPLETION, FZF_GIT, FZF_HISTORY, Fragments
from zshetc.core.models.options import SystemEnvironment, ZshOptions
from zshetc.core.models.template import GeneratedFile

# logical name → target path on the managed system
TARGET_PATHS: dict[str, str] = {
    ENV: "/etc/zshenv",
    LOGIN_PROFILE: "/etc/zprofile",
    INTERACTIVE_RC: "/etc/zshrc",
}

_HISTORY_DEFAULTS = """\
# history defaults
SAVEHIST=2000
HISTSIZE=2000
HISTFILE=$HOME/.zsh_history

setopt HIST_IGNORE_DUPS SHARE_HISTORY HIST_FCNTL_LOCK

bindkey -e"""

_COMPINIT = "autoload -U compinit && compinit"
_BASHCOMPINIT = "autoload -U bashcompinit && bashcompinit"

# package-relative paths of the plugin entry scripts
_AUTOSUGGESTIONS = "share/zsh-autosuggestions/zsh-autosuggestions.zsh"
_SYNTAX_HIGHLIGHTING = "share/zsh-syntax-highlighting/zsh-syntax-highlighting.zsh"
_FAST_SYNTAX_HIGHLIGHTING = "share/zsh/site-functions/fast-syntax-highlighting.plugin.zsh"


def _header(path: str, read_for: str) -> str:
    return (
        f"# {path}: DO NOT EDIT -- this file has been generated automatically.\n"
        f"# This file is read for {read_for}."
    )


def _local_override(path: str) -> str:
    return (
        "# Read system-wide modifications.\n"
        f"if test -f {path}.local; then\n"
        f"  source {path}.local\n"
        "fi"
    )


def _optional(enabled: bool | None, text: str) -> str:
    return text if enabled else ""


def render_variables(variables: dict[str, str]) -> str:
    """One ``NAME="value"`` line per variable, in mapping order."""
    return "\n".join(f'{name}="{value}"' for name, value in variables.items())


def render_aliases(aliases: dict[str, str]) -> str:
    """One ``alias -- name='value'`` line per alias, in mapping order."""
    return "\n".join(f"alias -- {name}={shlex.quote(value)}" for name, value in aliases.items())


def generate_zshenv(options: ZshOptions, environment: SystemEnvironment) -> GeneratedFile:
    """Generate /etc/zshenv, read by every zsh."""
    path = TARGET_PATHS[ENV]
    profiles = environment.profiles_variable
    marker = environment.set_environment_marker

    parts = [
        _header(path, "all shells"),
        "",
        "# Only execute this file once per shell.",
        'if [ -n "${__ETC_ZSHENV_SOURCED-}" ]; then return; fi',
        "__ETC_ZSHENV_SOURCED=1",
        "",
        "if [[ -o rcs ]]; then",
        f'  if [ -z "${{{marker}-}}" ]; then',
        f"    . {environment.set_environment}",
        "  fi",
        "",
        "  # Tell zsh how to find installed completions",
        f"  for p in ${{(z){profiles}}}; do",
        "    fpath=($p/share/zsh/site-functions $p/share/zsh/$ZSH_VERSION/functions"
        " $p/share/zsh/vendor-completions $fpath)",
        "  done",
        "",
        f"  {options.shell_init}",
        "fi",
        "",
        _local_override(path),
    ]

    return GeneratedFile(
        name=ENV,
        path=path,
        content="\n".join(parts) + "\n",
        known_hashes=known_hashes(ENV),
        reason="zsh environment for all shells",
    )


def generate_zprofile(options: ZshOptions, environment: SystemEnvironment) -> GeneratedFile:
    """Generate /etc/zprofile, read by login shells."""
    path = TARGET_PATHS[LOGIN_PROFILE]

    parts = [
        _header(path, "login shells"),
        "",
        "# Only execute this file once per shell.",
        'if [ -n "${__ETC_ZPROFILE_SOURCED-}" ]; then return; fi',
        "__ETC_ZPROFILE_SOURCED=1",
        "",
        render_variables(options.variables),
        render_aliases(environment.shell_aliases),
        "",
        options.login_shell_init,
        "",
        _local_override(path),
    ]

    return GeneratedFile(
        name=LOGIN_PROFILE,
        path=path,
        content="\n".join(parts) + "\n",
        known_hashes=known_hashes(LOGIN_PROFILE),
        reason=f"zsh login profile with {len(options.variables)} variable(s)",
    )


def generate_zshrc(
    options: ZshOptions,
    environment: SystemEnvironment,
    fragments: Fragments,
) -> GeneratedFile:
    """Generate /etc/zshrc, read by interactive shells.

    ``options`` must have gone through default resolution and
    validation; fragments for enabled fzf toggles must be present.
    """
    path = TARGET_PATHS[INTERACTIVE_RC]
    prefix = environment.package_prefix.rstrip("/")

    parts = [
        _header(path, "interactive shells"),
        "",
        "# Only execute this file once per shell.",
        'if [ -n "$__ETC_ZSHRC_SOURCED" -o -n "$NOSYSZSHRC" ]; then return; fi',
        "__ETC_ZSHRC_SOURCED=1",
        "",
        _HISTORY_DEFAULTS,
        "",
        environment.interactive_shell_init,
        options.interactive_shell_init,
        "",
        options.prompt_init,
        "",
        _optional(options.enable_global_comp_init, _COMPINIT),
        _optional(options.enable_bash_completion, _BASHCOMPINIT),
        "",
        _optional(options.enable_autosuggestions, f"source {prefix}/{_AUTOSUGGESTIONS}"),
        "",
        _optional(options.enable_syntax_highlighting, f"source {prefix}/{_SYNTAX_HIGHLIGHTING}"),
        "",
        _optional(
            options.enable_fast_syntax_highlighting,
            f"source {prefix}/{_FAST_SYNTAX_HIGHLIGHTING}",
        ),
        "",
        _optional(options.enable_fzf_completion, fragments.get(FZF_COMPLETION) or ""),
        _optional(options.enable_fzf_git, fragments.get(FZF_GIT) or ""),
        _optional(options.enable_fzf_history, fragments.get(FZF_HISTORY) or ""),
        "",
        _local_override(path),
    ]

    enabled = sum(
        bool(flag)
        for flag in (
            options.enable_global_comp_init,
            options.enable_bash_completion,
            options.enable_autosuggestions,
            options.enable_syntax_highlighting,
            options.enable_fast_syntax_highlighting,
            options.enable_fzf_completion,
            options.enable_fzf_git,
            options.enable_fzf_history,
        )
    )

    return GeneratedFile(
        name=INTERACTIVE_RC,
        path=path,
        content="\n".join(parts) + "\n",
        known_hashes=known_hashes(INTERACTIVE_RC),
        reason=f"zsh interactive config with {enabled} optional block(s)",
    )


def assemble(
    options: ZshOptions,
    fragments: Fragments,
    environment: SystemEnvironment | None = None,
) -> dict[str, GeneratedFile]:
    """Generate all three zsh startup files.

    Returns:
        Logical name → GeneratedFile, in env, login-profile,
        interactive-rc order.  Empty when ``options.enable`` is false.
    """
    if not options.enable:
        return {}

    environment = environment or SystemEnvironment()
    return {
        ENV: generate_zshenv(options, environment),
        LOGIN_PROFILE: generate_zprofile(options, environment),
        INTERACTIVE_RC: generate_zshrc(options, environment, fragments),
    }


def required_packages(options: ZshOptions) -> list[str]:
    """Packages the enabled options rely on (informational only)."""
    if not options.enable:
        return []

    packages = ["zsh"]
    if options.enable_completion:
        packages.append("nix-zsh-completions")
    if options.enable_autosuggestions:
        packages.append("zsh-autosuggestions")
    if options.enable_syntax_highlighting:
        packages.append("zsh-syntax-highlighting")
    if options.enable_fast_syntax_highlighting:
        packages.append("zsh-fast-syntax-highlighting")
    return packages
