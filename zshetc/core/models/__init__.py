"""
Domain models — Pydantic types for zsh-etc.

    from zshetc.core.models import ZshOptions, Fragments, GeneratedFile
"""

from zshetc.core.models.fragments import (
    FRAGMENT_TOGGLES,
    FZF_COMPLETION,
    FZF_GIT,
    FZF_HISTORY,
    Fragments,
)
from zshetc.core.models.options import (
    DEFAULT_PROMPT_INIT,
    SystemEnvironment,
    ZshConfig,
    ZshOptions,
)
from zshetc.core.models.template import GeneratedFile

__all__ = [
    "DEFAULT_PROMPT_INIT",
    # fragments.py
    "FRAGMENT_TOGGLES",
    "FZF_COMPLETION",
    "FZF_GIT",
    "FZF_HISTORY",
    "Fragments",
    # template.py
    "GeneratedFile",
    # options.py
    "SystemEnvironment",
    "ZshConfig",
    "ZshOptions",
]
