"""
Render use case — load zsh.yml and assemble the three startup files.

Nothing is written.  This is the shared front half of ``plan`` and
``apply`` and backs ``zshetc render``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from zshetc.core.config.loader import (
    ConfigError,
    config_root,
    find_config_file,
    load_config,
    load_fragments,
)
from zshetc.core.config.resolve import resolve_defaults, validate_options
from zshetc.core.data.known_hashes import known_hashes
from zshetc.core.models.options import ZshConfig, ZshOptions
from zshetc.core.models.template import GeneratedFile
from zshetc.core.services.generators.zsh import assemble

logger = logging.getLogger(__name__)


@dataclass
class RenderResult:
    """Result of assembling the zsh files."""

    config_path: Path | None = None
    config: ZshConfig | None = None
    options: ZshOptions | None = None
    files: dict[str, GeneratedFile] = field(default_factory=dict)
    error: str | None = None

    @property
    def enabled(self) -> bool:
        return self.options is not None and self.options.enable

    def to_dict(self) -> dict:
        return {
            "config_path": str(self.config_path) if self.config_path else None,
            "enabled": self.enabled,
            "error": self.error,
            "files": {
                name: {"path": f.path, "content": f.content, "reason": f.reason}
                for name, f in self.files.items()
            },
        }


def render_files(config_path: Path | None = None) -> RenderResult:
    """Load, resolve, validate and assemble.

    Configuration errors are returned in ``result.error``; no file is
    assembled when there is one.

    Args:
        config_path: Optional explicit path to zsh.yml.

    Returns:
        RenderResult with one GeneratedFile per logical name.
    """
    result = RenderResult()

    if config_path is None:
        config_path = find_config_file()
    if config_path is None:
        result.error = "No zsh.yml found."
        return result
    result.config_path = config_path

    try:
        config = load_config(config_path)
        options = resolve_defaults(config.zsh)
        fragments = load_fragments(config, config_root(config_path))
        validate_options(options, fragments)
    except ConfigError as e:
        result.error = str(e)
        return result

    result.config = config
    result.options = options

    if not options.enable:
        logger.info("zsh is disabled in %s — nothing to generate", config_path)
        return result

    files = assemble(options, fragments, config.environment)

    # Append configured digests to the built-in registry
    for name, generated in files.items():
        extra = config.known_hashes.get(name, [])
        if extra:
            files[name] = generated.model_copy(
                update={"known_hashes": known_hashes(name, extra)}
            )

    result.files = files
    logger.info("Assembled %d zsh file(s)", len(files))
    return result
