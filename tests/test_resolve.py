"""
Tests for option resolution — derived defaults and cross-option validation.
"""

import pytest

from zshetc.core.config.loader import ConfigError
from zshetc.core.config.resolve import (
    EXCLUSIVE_HIGHLIGHTING_MESSAGE,
    check_options,
    resolve_defaults,
    validate_options,
)
from zshetc.core.models.fragments import Fragments
from zshetc.core.models.options import ZshOptions

_OTHER_TOGGLES = (
    "enable",
    "enable_completion",
    "enable_bash_completion",
    "enable_global_comp_init",
    "enable_autosuggestions",
)


class TestResolveDefaults:
    def test_global_compinit_follows_completion(self):
        assert resolve_defaults(ZshOptions()).enable_global_comp_init is True

    def test_completion_off_turns_global_compinit_off(self):
        o = resolve_defaults(ZshOptions(enable_completion=False))
        assert o.enable_global_comp_init is False

    def test_explicit_value_kept(self):
        o = resolve_defaults(ZshOptions(enable_completion=False, enable_global_comp_init=True))
        assert o.enable_global_comp_init is True

    def test_does_not_mutate_input(self):
        raw = ZshOptions()
        resolve_defaults(raw)
        assert raw.enable_global_comp_init is None

    def test_idempotent(self):
        once = resolve_defaults(ZshOptions(enable_completion=False))
        assert resolve_defaults(once) == once


class TestHighlightingExclusive:
    def test_both_set_is_error(self):
        o = resolve_defaults(ZshOptions(
            enable_syntax_highlighting=True,
            enable_fast_syntax_highlighting=True,
        ))
        errors = check_options(o)
        assert len(errors) == 1
        assert EXCLUSIVE_HIGHLIGHTING_MESSAGE in errors[0]
        assert "enableSyntaxHighlighting" in errors[0]
        assert "enableFastSyntaxHighlighting" in errors[0]

    @pytest.mark.parametrize("toggle", _OTHER_TOGGLES)
    @pytest.mark.parametrize("value", [True, False])
    def test_both_set_fails_whatever_else(self, toggle: str, value: bool):
        o = resolve_defaults(ZshOptions(
            enable_syntax_highlighting=True,
            enable_fast_syntax_highlighting=True,
            **{toggle: value},
        ))
        with pytest.raises(ConfigError, match="mutually exclusive"):
            validate_options(o)

    def test_both_set_fails_with_all_fzf(self):
        o = resolve_defaults(ZshOptions(
            enable_syntax_highlighting=True,
            enable_fast_syntax_highlighting=True,
            enable_fzf_completion=True,
            enable_fzf_git=True,
            enable_fzf_history=True,
        ))
        frags = Fragments(texts={"fzf-completion": "a", "fzf-git": "b", "fzf-history": "c"})
        with pytest.raises(ConfigError, match="mutually exclusive"):
            validate_options(o, frags)

    @pytest.mark.parametrize("syntax,fast", [(True, False), (False, True), (False, False)])
    def test_one_or_none_is_fine(self, syntax: bool, fast: bool):
        o = resolve_defaults(ZshOptions(
            enable_syntax_highlighting=syntax,
            enable_fast_syntax_highlighting=fast,
        ))
        validate_options(o)


class TestFragmentPresence:
    def test_missing_fragment_named(self):
        o = resolve_defaults(ZshOptions(enable_fzf_git=True))
        errors = check_options(o, Fragments())
        assert len(errors) == 1
        assert "fzf-git" in errors[0]
        assert "enableFzfGit" in errors[0]

    def test_all_missing_reported(self):
        o = resolve_defaults(ZshOptions(
            enable_fzf_completion=True, enable_fzf_git=True, enable_fzf_history=True,
        ))
        errors = check_options(o, Fragments())
        assert len(errors) == 3

    def test_disabled_fragment_not_required(self):
        o = resolve_defaults(ZshOptions())
        assert check_options(o, Fragments()) == []

    def test_fragments_not_required_when_disabled(self):
        o = resolve_defaults(ZshOptions(enable=False, enable_fzf_git=True))
        assert check_options(o, Fragments()) == []

    def test_present_fragment_ok(self):
        o = resolve_defaults(ZshOptions(enable_fzf_history=True))
        validate_options(o, Fragments(texts={"fzf-history": "bindkey '^r' fzf-history"}))

    def test_fragments_unchecked_when_none(self):
        o = resolve_defaults(ZshOptions(enable_fzf_history=True))
        assert check_options(o, None) == []

    def test_validate_raises_with_fragment_name(self):
        o = resolve_defaults(ZshOptions(enable_fzf_completion=True))
        with pytest.raises(ConfigError, match="fzf-completion"):
            validate_options(o, Fragments())
