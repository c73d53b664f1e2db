"""
zsh options — the typed configuration record driving generation.

Loaded from the ``zsh:`` section of zsh.yml.  YAML keys are camelCase
(``enableFzfHistory``), Python attributes are snake_case
(``enable_fzf_history``).  Records are frozen: they are built once per
run and never mutated.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

DEFAULT_PROMPT_INIT = "autoload -U promptinit && promptinit && prompt suse && setopt prompt_sp"


class ZshOptions(BaseModel):
    """Options for the system-wide zsh configuration.

    ``enable_global_comp_init`` is ``None`` until defaults are resolved
    (see ``zshetc.core.config.resolve.resolve_defaults``), after which
    it is always a bool.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    enable: bool = True

    # Environment variables set by the login profile.  List values are
    # joined with ':' when the record is built.
    variables: dict[str, str] = Field(default_factory=dict)

    shell_init: str = ""
    login_shell_init: str = ""
    interactive_shell_init: str = ""
    prompt_init: str = DEFAULT_PROMPT_INIT

    enable_completion: bool = True
    enable_bash_completion: bool = True
    enable_global_comp_init: bool | None = None

    enable_fzf_completion: bool = False
    enable_fzf_git: bool = False
    enable_fzf_history: bool = False

    enable_autosuggestions: bool = False
    enable_syntax_highlighting: bool = False
    enable_fast_syntax_highlighting: bool = False

    @field_validator("variables", mode="before")
    @classmethod
    def _join_list_values(cls, value: object) -> object:
        if not isinstance(value, dict):
            return value
        return {
            name: ":".join(str(v) for v in val) if isinstance(val, list) else val
            for name, val in value.items()
        }


class SystemEnvironment(BaseModel):
    """Pieces of the surrounding system the zsh files refer to.

    Attributes:
        set_environment:        Script sourced once to set up the base environment.
        set_environment_marker: Variable that script exports once it has run.
        profiles_variable:      Variable listing profile directories (word-split by zsh).
        package_prefix:         Prefix under which plugin scripts are installed.
        shell_aliases:          System-wide aliases, emitted in the login profile.
        interactive_shell_init: System-wide interactive init, emitted in zshrc.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    set_environment: str = "/etc/set-environment"
    set_environment_marker: str = "__NIX_DARWIN_SET_ENVIRONMENT_DONE"
    profiles_variable: str = "NIX_PROFILES"
    package_prefix: str = "/run/current-system/sw"
    shell_aliases: dict[str, str] = Field(default_factory=dict)
    interactive_shell_init: str = ""


class ZshConfig(BaseModel):
    """Root document of zsh.yml."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    version: int = 1
    zsh: ZshOptions = Field(default_factory=ZshOptions)
    environment: SystemEnvironment = Field(default_factory=SystemEnvironment)

    # fragment name → path of the file holding its text
    fragments: dict[str, str] = Field(default_factory=dict)

    # logical file name → extra accepted sha256 digests
    known_hashes: dict[str, list[str]] = Field(default_factory=dict)
