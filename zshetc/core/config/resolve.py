"""
Option resolution — defaults derived from other options, then validation.

Runs once over a freshly loaded record, before anything is assembled:

    options = resolve_defaults(config.zsh)
    validate_options(options, fragments)   # raises ConfigError
"""

from __future__ import annotations

import logging

from pydantic.alias_generators import to_camel

from zshetc.core.config.loader import ConfigError, enabled_fragments
from zshetc.core.models.fragments import FRAGMENT_TOGGLES, Fragments
from zshetc.core.models.options import ZshOptions

logger = logging.getLogger(__name__)

EXCLUSIVE_HIGHLIGHTING_MESSAGE = (
    "zsh-syntax-highlighting and zsh-fast-syntax-highlighting are mutually exclusive, "
    "please disable one of them."
)


def resolve_defaults(options: ZshOptions) -> ZshOptions:
    """Fill in options whose default depends on other options.

    ``enable_global_comp_init`` defaults to ``enable_completion``.
    An explicit value is left untouched.
    """
    if options.enable_global_comp_init is not None:
        return options
    return options.model_copy(update={"enable_global_comp_init": options.enable_completion})


def check_options(options: ZshOptions, fragments: Fragments | None = None) -> list[str]:
    """Return every configuration error for a resolved record.

    Args:
        options: Record after ``resolve_defaults``.
        fragments: Available fragments.  When None, or when the record
            is disabled, fragment presence is not checked.

    Returns:
        Error messages, empty when the record is valid.
    """
    errors: list[str] = []

    if options.enable_syntax_highlighting and options.enable_fast_syntax_highlighting:
        errors.append(
            f"{EXCLUSIVE_HIGHLIGHTING_MESSAGE} "
            "(enableSyntaxHighlighting, enableFastSyntaxHighlighting)"
        )

    # Fragments are only read when something will be generated
    if fragments is not None and options.enable:
        for name in enabled_fragments(options):
            if name not in fragments:
                toggle = FRAGMENT_TOGGLES[name]
                errors.append(
                    f"Fragment '{name}' is required by {to_camel(toggle)} but was not supplied."
                )

    return errors


def validate_options(options: ZshOptions, fragments: Fragments | None = None) -> None:
    """Raise ConfigError if the resolved record cannot be assembled."""
    errors = check_options(options, fragments)
    if errors:
        for err in errors:
            logger.error("%s", err)
        raise ConfigError("; ".join(errors))
