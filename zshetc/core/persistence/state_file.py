"""
Ledger file persistence — atomic read/write for WriteLedger.

The ledger is stored as JSON, by default in .state/written.json next to
zsh.yml.  Writes are atomic (write to temp file, then rename).
"""

from __future__ import annotations

import json
import logging
import tempfile
from pathlib import Path

from pydantic import ValidationError

from zshetc.core.models.state import WriteLedger

logger = logging.getLogger(__name__)

# Default ledger path (relative to the config directory)
DEFAULT_STATE_DIR = ".state"
DEFAULT_STATE_FILE = "written.json"


def default_ledger_path(config_dir: Path) -> Path:
    """Get the default ledger path for a config directory."""
    return config_dir / DEFAULT_STATE_DIR / DEFAULT_STATE_FILE


def load_ledger(path: Path) -> WriteLedger:
    """Load the write ledger from a JSON file.

    Args:
        path: Path to the ledger JSON file.

    Returns:
        WriteLedger. If the file doesn't exist or is unreadable,
        returns an empty ledger.
    """
    if not path.is_file():
        logger.info("No ledger at %s — starting fresh", path)
        return WriteLedger()

    try:
        raw = path.read_text(encoding="utf-8")
        ledger = WriteLedger.model_validate(json.loads(raw))
        logger.debug("Loaded ledger from %s (%d files)", path, len(ledger.files))
        return ledger
    except json.JSONDecodeError as e:
        logger.warning("Corrupt ledger %s: %s — starting fresh", path, e)
        return WriteLedger()
    except (OSError, ValidationError) as e:
        logger.warning("Cannot load ledger from %s: %s — starting fresh", path, e)
        return WriteLedger()


def save_ledger(ledger: WriteLedger, path: Path) -> None:
    """Save the write ledger to a JSON file (atomic write)."""
    ledger.touch()

    data = ledger.model_dump(mode="json")
    content = json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    atomic_write_text(path, content, prefix=".state_")
    logger.debug("Ledger saved to %s", path)


def atomic_write_text(path: Path, content: str, prefix: str = ".tmp_", mode: int = 0o644) -> None:
    """Write ``content`` to ``path`` via a temp file in the same directory.

    Creates parent directories.  The temp file is removed if the rename
    fails, and the original error is re-raised.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=prefix, suffix=".tmp")
    tmp = Path(tmp_path)
    try:
        with open(fd, "w", encoding="utf-8", newline="") as fh:
            fh.write(content)
        tmp.chmod(mode)
        tmp.replace(path)
    except Exception:
        tmp.unlink(missing_ok=True)
        logger.error("Failed to write %s", path)
        raise
