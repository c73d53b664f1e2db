"""
Script fragments — opaque blocks of zsh text injected into zshrc.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

FZF_COMPLETION = "fzf-completion"
FZF_GIT = "fzf-git"
FZF_HISTORY = "fzf-history"

# fragment name → the option that enables it
FRAGMENT_TOGGLES: dict[str, str] = {
    FZF_COMPLETION: "enable_fzf_completion",
    FZF_GIT: "enable_fzf_git",
    FZF_HISTORY: "enable_fzf_history",
}


class Fragments(BaseModel):
    """Fragment texts keyed by fragment name.

    Only fragments whose toggle is enabled need to be present.
    """

    model_config = ConfigDict(frozen=True)

    texts: dict[str, str] = Field(default_factory=dict)

    def get(self, name: str) -> str | None:
        return self.texts.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self.texts
