"""
Config check use case — validate zsh.yml and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from zshetc.core.config.loader import (
    ConfigError,
    config_root,
    enabled_fragments,
    find_config_file,
    load_config,
    load_fragments,
)
from zshetc.core.config.resolve import check_options, resolve_defaults
from zshetc.core.data.known_hashes import LOGICAL_NAMES
from zshetc.core.models.options import ZshConfig, ZshOptions


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    config: ZshConfig | None = None
    options: ZshOptions | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "enabled": self.options.enable if self.options else None,
            "variable_count": len(self.options.variables) if self.options else 0,
            "fragments": enabled_fragments(self.options) if self.options else [],
        }


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate zsh configuration and report issues.

    Args:
        config_path: Optional explicit path to zsh.yml.

    Returns:
        ConfigCheckResult with validation status and any issues.
    """
    result = ConfigCheckResult()

    if config_path is None:
        config_path = find_config_file()

    if config_path is None:
        result.errors.append("No zsh.yml found.")
        return result

    result.config_path = config_path

    # Load and validate schema
    try:
        config = load_config(config_path)
    except ConfigError as e:
        result.errors.append(str(e))
        return result

    result.config = config
    options = resolve_defaults(config.zsh)
    result.options = options

    # Cross-option checks, including fragment presence
    fragments = load_fragments(config, config_root(config_path))
    result.errors.extend(check_options(options, fragments))

    # Semantic warnings
    if not options.enable:
        result.warnings.append("zsh is disabled (enable: false); no files will be generated.")

    unknown = sorted(set(config.known_hashes) - set(LOGICAL_NAMES))
    if unknown:
        result.warnings.append(
            f"knownHashes has entries for unknown files: {', '.join(unknown)} "
            f"(expected one of: {', '.join(LOGICAL_NAMES)})"
        )

    for name, digests in config.known_hashes.items():
        for digest in digests:
            hex_part = digest.strip().lower().removeprefix("sha256:")
            if len(hex_part) != 64 or any(c not in "0123456789abcdef" for c in hex_part):
                result.warnings.append(f"knownHashes.{name}: not a sha256 hex digest: {digest}")

    declared_unused = sorted(set(config.fragments) - set(enabled_fragments(options)))
    for name in declared_unused:
        result.warnings.append(f"Fragment '{name}' is declared but its toggle is off.")

    for name, value in options.variables.items():
        if '"' in value:
            result.warnings.append(
                f"Variable {name} contains a double quote; it is emitted unescaped."
            )

    result.valid = len(result.errors) == 0
    return result
