"""
Tests for the config check use case.
"""

from pathlib import Path

from zshetc.core.use_cases.config_check import check_config


class TestCheckConfig:
    def test_valid(self, write_config):
        result = check_config(write_config("zsh:\n  enableAutosuggestions: true\n"))
        assert result.valid
        assert result.errors == []
        assert result.options is not None
        assert result.options.enable_global_comp_init is True

    def test_missing_file(self, tmp_path: Path):
        result = check_config(tmp_path / "zsh.yml")
        assert not result.valid
        assert "not found" in result.errors[0]

    def test_exclusive_highlighting(self, write_config):
        result = check_config(write_config("""\
            zsh:
              enableSyntaxHighlighting: true
              enableFastSyntaxHighlighting: true
        """))
        assert not result.valid
        assert any("mutually exclusive" in e for e in result.errors)

    def test_missing_fragment(self, write_config):
        result = check_config(write_config("zsh:\n  enableFzfGit: true\n"))
        assert not result.valid
        assert any("fzf-git" in e for e in result.errors)

    def test_both_errors_reported(self, write_config):
        result = check_config(write_config("""\
            zsh:
              enableSyntaxHighlighting: true
              enableFastSyntaxHighlighting: true
              enableFzfGit: true
        """))
        assert len(result.errors) == 2

    def test_disabled_warns(self, write_config):
        result = check_config(write_config("enable: false\n"))
        assert result.valid
        assert any("disabled" in w for w in result.warnings)

    def test_unknown_known_hashes_key_warns(self, write_config):
        result = check_config(write_config(f"""\
            knownHashes:
              zlogin: ["{'a' * 64}"]
        """))
        assert result.valid
        assert any("zlogin" in w for w in result.warnings)

    def test_malformed_digest_warns(self, write_config):
        result = check_config(write_config("""\
            knownHashes:
              env: ["not-a-digest"]
        """))
        assert any("not-a-digest" in w for w in result.warnings)

    def test_unused_fragment_warns(self, write_config):
        result = check_config(write_config("""\
            fragments:
              fzf-git: fzf-git.zsh
        """))
        assert result.valid
        assert any("fzf-git" in w for w in result.warnings)

    def test_quoted_variable_warns(self, write_config):
        result = check_config(write_config("""\
            zsh:
              variables:
                GREETING: 'say "hi"'
        """))
        assert any("GREETING" in w for w in result.warnings)

    def test_to_dict(self, write_config):
        d = check_config(write_config("zsh:\n  variables: {A: '1'}\n")).to_dict()
        assert d["valid"] is True
        assert d["variable_count"] == 1
        assert d["fragments"] == []
