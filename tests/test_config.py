"""
Tests for configuration loading — zsh.yml parsing, validation, fragments.
"""

from pathlib import Path

import pytest

from zshetc.core.config import loader
from zshetc.core.config.loader import (
    ConfigError,
    enabled_fragments,
    find_config_file,
    load_config,
    load_fragments,
)
from zshetc.core.models.options import ZshOptions


@pytest.fixture
def sectioned_yml(write_config) -> Path:
    return write_config("""\
        version: 1
        zsh:
          enableSyntaxHighlighting: true
          enableFzfGit: true
          variables:
            EDITOR: vim
            PATH_EXTRA: [/a, /b]
          loginShellInit: |
            umask 022
        environment:
          setEnvironment: /opt/set-env
          shellAliases:
            ll: ls -l
        fragments:
          fzf-git: fragments/fzf-git.zsh
        knownHashes:
          interactive-rc:
            - "aaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaa"
    """)


class TestLoadConfig:
    def test_sectioned(self, sectioned_yml: Path):
        config = load_config(sectioned_yml)
        assert config.zsh.enable_syntax_highlighting is True
        assert config.zsh.enable_fzf_git is True
        assert config.zsh.variables == {"EDITOR": "vim", "PATH_EXTRA": "/a:/b"}
        assert config.zsh.login_shell_init == "umask 022\n"
        assert config.environment.set_environment == "/opt/set-env"
        assert config.environment.shell_aliases == {"ll": "ls -l"}
        assert config.fragments == {"fzf-git": "fragments/fzf-git.zsh"}
        assert config.known_hashes == {"interactive-rc": ["a" * 64]}

    def test_flat(self, write_config):
        path = write_config("""\
            enableCompletion: false
            promptInit: "PROMPT='%# '"
        """)
        config = load_config(path)
        assert config.zsh.enable_completion is False
        assert config.zsh.prompt_init == "PROMPT='%# '"

    def test_flat_with_version(self, write_config):
        path = write_config("version: 1\nenable: false\n")
        config = load_config(path)
        assert config.version == 1
        assert config.zsh.enable is False

    def test_empty_file_gives_defaults(self, write_config):
        config = load_config(write_config(""))
        assert config.zsh == ZshOptions()

    def test_missing_file_raises(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "nonexistent.yml")

    def test_invalid_yaml_raises(self, write_config):
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(write_config(":: invalid: yaml: ["))

    def test_non_mapping_raises(self, write_config):
        with pytest.raises(ConfigError, match="Expected a YAML mapping"):
            load_config(write_config("- a\n- b\n"))

    def test_unknown_option_raises(self, write_config):
        path = write_config("""\
            zsh:
              enableTurbo: true
        """)
        with pytest.raises(ConfigError, match="Invalid zsh configuration"):
            load_config(path)

    def test_wrong_type_raises(self, write_config):
        path = write_config("""\
            zsh:
              enable: [1, 2]
        """)
        with pytest.raises(ConfigError):
            load_config(path)

    def test_no_config_anywhere(self, monkeypatch):
        monkeypatch.setattr(loader, "find_config_file", lambda: None)
        with pytest.raises(ConfigError, match="No zsh.yml"):
            load_config()


class TestFindConfigFile:
    def test_in_start_dir(self, tmp_path: Path):
        (tmp_path / "zsh.yml").write_text("enable: true\n")
        assert find_config_file(tmp_path) == (tmp_path / "zsh.yml").resolve()

    def test_walks_up(self, tmp_path: Path):
        (tmp_path / "zsh.yml").write_text("enable: true\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config_file(nested) == (tmp_path / "zsh.yml").resolve()


class TestLoadFragments:
    def test_reads_enabled_only(self, tmp_path: Path, write_config):
        frag_dir = tmp_path / "fragments"
        frag_dir.mkdir()
        (frag_dir / "fzf-git.zsh").write_text("bindkey '^g' fzf-git\n")
        (frag_dir / "fzf-history.zsh").write_text("bindkey '^r' fzf-history\n")
        path = write_config("""\
            zsh:
              enableFzfGit: true
            fragments:
              fzf-git: fragments/fzf-git.zsh
              fzf-history: fragments/fzf-history.zsh
        """)
        fragments = load_fragments(load_config(path), tmp_path)
        assert fragments.texts == {"fzf-git": "bindkey '^g' fzf-git\n"}

    def test_disabled_fragment_never_read(self, tmp_path: Path, write_config):
        path = write_config("""\
            fragments:
              fzf-history: does/not/exist.zsh
        """)
        assert load_fragments(load_config(path), tmp_path).texts == {}

    def test_absolute_path(self, tmp_path: Path, write_config):
        frag = tmp_path / "elsewhere.zsh"
        frag.write_text("x\n")
        path = write_config(f"""\
            zsh:
              enableFzfCompletion: true
            fragments:
              fzf-completion: {frag}
        """)
        fragments = load_fragments(load_config(path), tmp_path / "unused")
        assert fragments.get("fzf-completion") == "x\n"

    def test_unreadable_fragment_left_out(self, tmp_path: Path, write_config):
        path = write_config("""\
            zsh:
              enableFzfHistory: true
            fragments:
              fzf-history: missing.zsh
        """)
        assert "fzf-history" not in load_fragments(load_config(path), tmp_path)

    def test_undeclared_fragment_left_out(self, tmp_path: Path, write_config):
        path = write_config("zsh:\n  enableFzfHistory: true\n")
        assert load_fragments(load_config(path), tmp_path).texts == {}


class TestEnabledFragments:
    def test_order(self):
        options = ZshOptions(enable_fzf_history=True, enable_fzf_completion=True)
        assert enabled_fragments(options) == ["fzf-completion", "fzf-history"]

    def test_none(self):
        assert enabled_fragments(ZshOptions()) == []
