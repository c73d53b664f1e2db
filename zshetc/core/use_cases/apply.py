"""
Apply use case — write the zsh files the drift guard allows.

Each logical file is handled on its own: a conflict or write failure
on one file is recorded on its outcome and the others still proceed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from zshetc.core.config.loader import config_root
from zshetc.core.models.template import GeneratedFile
from zshetc.core.persistence.state_file import (
    atomic_write_text,
    default_ledger_path,
    load_ledger,
    save_ledger,
)
from zshetc.core.services.drift_guard import Decision, decide, sha256_hex
from zshetc.core.use_cases.render import render_files

logger = logging.getLogger(__name__)


@dataclass
class FileOutcome:
    """What happened to one logical file."""

    name: str
    path: str
    decision: Decision
    written: bool = False
    on_disk_sha256: str | None = None
    new_sha256: str = ""
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.decision is not Decision.CONFLICT and self.error is None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "path": self.path,
            "decision": self.decision.value,
            "written": self.written,
            "on_disk_sha256": self.on_disk_sha256,
            "new_sha256": self.new_sha256,
            "error": self.error,
        }


@dataclass
class ApplyResult:
    """Result of a plan or apply run."""

    config_path: Path | None = None
    root: Path = Path("/")
    dry_run: bool = False
    enabled: bool = True
    outcomes: list[FileOutcome] = field(default_factory=list)
    error: str | None = None

    @property
    def conflicts(self) -> list[FileOutcome]:
        return [o for o in self.outcomes if o.decision is Decision.CONFLICT and o.error is None]

    @property
    def failed(self) -> list[FileOutcome]:
        return [o for o in self.outcomes if o.error is not None]

    @property
    def ok(self) -> bool:
        return self.error is None and all(o.ok for o in self.outcomes)

    def to_dict(self) -> dict:
        return {
            "config_path": str(self.config_path) if self.config_path else None,
            "root": str(self.root),
            "dry_run": self.dry_run,
            "enabled": self.enabled,
            "ok": self.ok,
            "error": self.error,
            "files": [o.to_dict() for o in self.outcomes],
        }


def target_path(root: Path, path: str) -> Path:
    """Place an absolute target path under ``root``."""
    return root / path.lstrip("/")


def read_existing(target: Path) -> bytes | None:
    """Current bytes of ``target``, or None if there is no file."""
    try:
        return target.read_bytes()
    except FileNotFoundError:
        return None


def apply_files(
    config_path: Path | None = None,
    root: Path = Path("/"),
    dry_run: bool = False,
    rewrite_stale: bool = True,
    ledger_path: Path | None = None,
) -> ApplyResult:
    """Generate the zsh files and write those the drift guard allows.

    Args:
        config_path: Optional explicit path to zsh.yml.
        root: Prefix the absolute target paths are placed under.
            Resolved to an absolute path first.
        dry_run: Decide only, write nothing (plan).
        rewrite_stale: Replace known predecessors that differ from the
            new content.  When False they are left in place.
        ledger_path: Where write digests are recorded
            (default: .state/written.json next to zsh.yml).

    Returns:
        ApplyResult with one FileOutcome per logical file.
    """
    # Ledger keys are absolute so relative and absolute roots agree
    root = root.resolve()
    rendered = render_files(config_path)
    result = ApplyResult(config_path=rendered.config_path, root=root, dry_run=dry_run)

    if rendered.error:
        result.error = rendered.error
        return result

    if not rendered.enabled:
        result.enabled = False
        return result

    assert rendered.config_path is not None
    if ledger_path is None:
        ledger_path = default_ledger_path(config_root(rendered.config_path))
    ledger = load_ledger(ledger_path)

    ledger_changed = False
    for generated in rendered.files.values():
        outcome = _apply_one(generated, root, dry_run, rewrite_stale, ledger.digest_for)
        result.outcomes.append(outcome)
        if outcome.written:
            ledger.record(str(target_path(root, generated.path)), generated.name, outcome.new_sha256)
            ledger_changed = True

    if ledger_changed:
        try:
            save_ledger(ledger, ledger_path)
        except OSError as e:
            logger.warning("Could not record written digests in %s: %s", ledger_path, e)

    for outcome in result.conflicts:
        logger.warning(
            "%s was modified outside zsh-etc: its content is neither current "
            "nor a known predecessor. Not overwriting; move it aside (e.g. to %s.before-zsh-etc) "
            "and re-run.",
            outcome.path, outcome.path,
            extra={"zsh_file": outcome.name},
        )

    return result


def _apply_one(
    generated: GeneratedFile,
    root: Path,
    dry_run: bool,
    rewrite_stale: bool,
    previous_digest: Callable[[str], str | None],
) -> FileOutcome:
    target = target_path(root, generated.path)
    new_sha = sha256_hex(generated.content)

    try:
        existing = read_existing(target)
    except OSError as e:
        logger.error("Cannot read %s: %s", target, e, extra={"zsh_file": generated.name})
        return FileOutcome(
            name=generated.name,
            path=str(target),
            decision=Decision.CONFLICT,
            new_sha256=new_sha,
            error=f"Cannot read {target}: {e}",
        )

    accepted = list(generated.known_hashes)
    last_written = previous_digest(str(target))
    if last_written:
        accepted.append(last_written)

    decision = decide(generated.name, generated.content, existing, accepted, rewrite_stale)
    outcome = FileOutcome(
        name=generated.name,
        path=str(target),
        decision=decision,
        on_disk_sha256=sha256_hex(existing) if existing is not None else None,
        new_sha256=new_sha,
    )

    if not decision.writes or dry_run:
        logger.debug(
            "%s%s", decision.value, " (dry run)" if dry_run else "",
            extra={"zsh_file": generated.name},
        )
        return outcome

    try:
        atomic_write_text(target, generated.content, prefix=f".{target.name}_")
    except OSError as e:
        logger.error("Failed to write %s: %s", target, e, extra={"zsh_file": generated.name})
        outcome.error = f"Cannot write {target}: {e}"
        return outcome

    outcome.written = True
    logger.info("Wrote %s (%s)", target, generated.reason, extra={"zsh_file": generated.name})
    return outcome
