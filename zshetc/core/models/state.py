"""
WriteLedger — what zsh-etc last wrote to each target path.

Serialized to .state/written.json.  The digest recorded for a path is
accepted as a known predecessor on the next run, so our own previous
output can always be replaced, while edits made to it afterwards still
surface as conflicts.
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, Field


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class WrittenFile(BaseModel):
    """Record of one write."""

    name: str
    sha256: str
    written_at: str = Field(default_factory=_now_iso)


class WriteLedger(BaseModel):
    """All recorded writes, keyed by the path actually written."""

    version: int = 1
    updated_at: str = ""
    files: dict[str, WrittenFile] = Field(default_factory=dict)

    def touch(self) -> None:
        """Update the modification timestamp."""
        self.updated_at = _now_iso()

    def record(self, path: str, name: str, sha256: str) -> None:
        """Remember that ``path`` now holds content with ``sha256``."""
        self.files[path] = WrittenFile(name=name, sha256=sha256)

    def digest_for(self, path: str) -> str | None:
        """Digest last written to ``path``, if any."""
        entry = self.files.get(path)
        return entry.sha256 if entry else None
