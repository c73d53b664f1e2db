"""
Drift guard — decide whether a generated file may replace what is on disk.

An existing file is only replaced when it is byte-identical to a known
predecessor (vendor default, installer leftover, or our own previous
output).  Anything else is treated as a user edit and reported as a
conflict instead of being overwritten.
"""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Iterable
from enum import Enum

logger = logging.getLogger(__name__)


class Decision(str, Enum):
    """Outcome of the drift check for one logical file."""

    WRITE = "write"
    NO_OP_IDENTICAL = "identical"
    NO_OP_ACCEPTED_STALE = "accepted-stale"
    CONFLICT = "conflict"

    @property
    def writes(self) -> bool:
        return self is Decision.WRITE


def sha256_hex(content: str | bytes) -> str:
    """SHA-256 of the exact file bytes, lowercase hex."""
    if isinstance(content, str):
        content = content.encode("utf-8")
    return hashlib.sha256(content).hexdigest()


def decide(
    name: str,
    computed: str,
    on_disk: str | bytes | None,
    accepted: Iterable[str],
    rewrite_stale: bool = True,
) -> Decision:
    """Decide what to do with one generated file.

    Args:
        name: Logical file name (for logging).
        computed: Freshly generated content.
        on_disk: Current file content, or None if there is no file.
        accepted: Hex digests of contents that may be overwritten.
        rewrite_stale: When False, a known predecessor is left in place
            and reported as ``NO_OP_ACCEPTED_STALE``.

    Returns:
        The Decision for this file.
    """
    if on_disk is None:
        logger.debug("no file on disk", extra={"zsh_file": name})
        return Decision.WRITE

    disk_bytes = on_disk.encode("utf-8") if isinstance(on_disk, str) else on_disk
    if disk_bytes == computed.encode("utf-8"):
        logger.debug("on-disk content is up to date", extra={"zsh_file": name})
        return Decision.NO_OP_IDENTICAL

    digest = sha256_hex(disk_bytes)
    accepted_set = {d.strip().lower() for d in accepted}
    if digest in accepted_set:
        logger.debug(
            "on-disk digest %s is a known predecessor", digest, extra={"zsh_file": name},
        )
        return Decision.WRITE if rewrite_stale else Decision.NO_OP_ACCEPTED_STALE

    logger.debug("on-disk digest %s is not recognised", digest, extra={"zsh_file": name})
    return Decision.CONFLICT
