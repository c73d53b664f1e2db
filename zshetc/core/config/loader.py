"""
Configuration loader — reads zsh.yml into domain models.

This is the primary entry point for loading configuration.  It reads
YAML, validates against Pydantic schemas, and returns typed domain
objects.  Fragment files are read separately by ``load_fragments`` and
only for toggles that are enabled.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from zshetc.core.models.fragments import FRAGMENT_TOGGLES, Fragments
from zshetc.core.models.options import ZshConfig, ZshOptions

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "zsh.yml"

# Top-level keys of the wrapped layout
_SECTION_KEYS = ("version", "zsh", "environment", "fragments", "knownHashes")


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for zsh.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to zsh.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_config(path: Path | None = None) -> ZshConfig:
    """Load and validate zsh.yml.

    Both layouts are accepted: sections (``zsh:``, ``environment:``,
    ``fragments:``, ``knownHashes:``) or a flat mapping of zsh options.

    Args:
        path: Explicit path to zsh.yml. If None, searches upward.

    Returns:
        Validated ZshConfig model.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    if path is None:
        path = find_config_file()

    if path is None:
        raise ConfigError(f"No {CONFIG_FILE} found. Create one, or specify --config.")

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading zsh config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # Flat layout: every key is a zsh option
    if not any(key in data for key in _SECTION_KEYS if key != "version"):
        version = data.pop("version", 1)
        data = {"version": version, "zsh": data}

    try:
        config = ZshConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid zsh configuration in {path}: {e}") from e

    logger.info(
        "Loaded zsh config from %s (enable=%s, %d variables)",
        path, config.zsh.enable, len(config.zsh.variables),
    )
    return config


def load_fragments(config: ZshConfig, base_dir: Path) -> Fragments:
    """Read the fragment files needed by the enabled toggles.

    Fragments whose toggle is off are never read.  A fragment that is
    enabled but not declared (or not readable) is left out; validation
    reports it by name.

    Args:
        config: Loaded configuration.
        base_dir: Directory relative fragment paths are resolved against.

    Returns:
        Fragments holding the text of every readable enabled fragment.
    """
    texts: dict[str, str] = {}
    for name in enabled_fragments(config.zsh):
        declared = config.fragments.get(name)
        if not declared:
            continue
        path = Path(declared).expanduser()
        if not path.is_absolute():
            path = base_dir / path
        try:
            texts[name] = path.read_text(encoding="utf-8")
        except OSError as e:
            logger.warning("Cannot read fragment %s from %s: %s", name, path, e)
            continue
        logger.debug("Read fragment %s from %s (%d bytes)", name, path, len(texts[name]))
    return Fragments(texts=texts)


def enabled_fragments(options: ZshOptions) -> list[str]:
    """Names of the fragments whose toggle is set, in emission order."""
    return [name for name, toggle in FRAGMENT_TOGGLES.items() if getattr(options, toggle)]


def config_root(config_path: Path) -> Path:
    """Get the directory holding a config file."""
    return config_path.parent.resolve()
