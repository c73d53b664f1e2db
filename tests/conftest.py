"""
Shared test fixtures and configuration.
"""

import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest

from zshetc.core.config.resolve import resolve_defaults
from zshetc.core.models.fragments import FZF_COMPLETION, FZF_GIT, FZF_HISTORY, Fragments
from zshetc.core.models.options import ZshOptions

FRAGMENT_TEXTS = {
    FZF_COMPLETION: "source /opt/fzf/completion.zsh",
    FZF_GIT: "source /opt/fzf/git.zsh",
    FZF_HISTORY: "source /opt/fzf/history.zsh",
}


@pytest.fixture
def fragments() -> Fragments:
    """All three fzf fragments, one line each."""
    return Fragments(texts=dict(FRAGMENT_TEXTS))


@pytest.fixture
def make_options() -> Callable[..., ZshOptions]:
    """Build a resolved ZshOptions from keyword overrides."""

    def _make(**overrides) -> ZshOptions:
        return resolve_defaults(ZshOptions(**overrides))

    return _make


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[str], Path]:
    """Write a zsh.yml (dedented) into tmp_path and return its path."""

    def _write(content: str) -> Path:
        path = tmp_path / "zsh.yml"
        path.write_text(textwrap.dedent(content))
        return path

    return _write


@pytest.fixture
def target_root(tmp_path: Path) -> Path:
    """Return a temporary directory standing in for /."""
    root = tmp_path / "root"
    root.mkdir()
    return root
