"""
Generated file model — one per logical zsh startup file.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class GeneratedFile(BaseModel):
    """A file produced by the assembler.

    Attributes:
        name:         Logical name (env, login-profile, interactive-rc).
        path:         Absolute target path on the managed system.
        content:      Full file content.
        known_hashes: sha256 digests of predecessors that may be overwritten.
        reason:       Why this file was generated.
    """

    name: str
    path: str
    content: str
    known_hashes: list[str] = Field(default_factory=list)
    reason: str = ""
