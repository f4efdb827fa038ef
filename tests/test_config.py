# Copyright (c) Syntropy Systems
"""Tests for configuration loading."""

from pathlib import Path

import pytest

from tuneup.config import CONFIG_ENV_VAR, TuneupConfig, load_config


@pytest.fixture(autouse=True)
def isolated_home(monkeypatch: pytest.MonkeyPatch, temp_dir: Path) -> Path:
    """Keep the developer's own config out of these tests."""
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    return home


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults(self) -> None:
        """Test defaults when no file exists."""
        config = load_config()

        assert config == TuneupConfig()
        assert config.sysctl_path == Path("/etc/sysctl.conf")
        assert config.report_soft_failures is False

    def test_explicit_path(self, temp_dir: Path) -> None:
        """Test loading from a given file."""
        path = temp_dir / "config.yaml"
        _ = path.write_text(
            "sysctl_path: /tmp/sysctl.conf\n"
            "maxfiles_plist_path: /tmp/limit.plist\n"
            "report_soft_failures: true\n"
        )

        config = load_config(path)

        assert config.sysctl_path == Path("/tmp/sysctl.conf")
        assert config.maxfiles_plist_path == Path("/tmp/limit.plist")
        assert config.report_soft_failures is True

    def test_env_var(self, monkeypatch: pytest.MonkeyPatch, temp_dir: Path) -> None:
        """Test that $TUNEUP_CONFIG is honoured."""
        path = temp_dir / "env.yaml"
        _ = path.write_text("report_soft_failures: true\n")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

        assert load_config().report_soft_failures is True

    def test_global_config(self, isolated_home: Path) -> None:
        """Test ~/.tuneup/config.yaml."""
        config_dir = isolated_home / ".tuneup"
        config_dir.mkdir()
        _ = (config_dir / "config.yaml").write_text("sysctl_path: /opt/sysctl.conf\n")

        assert load_config().sysctl_path == Path("/opt/sysctl.conf")

    def test_bad_values_are_ignored(self, temp_dir: Path) -> None:
        """Test that wrongly typed and unknown keys fall back to defaults."""
        path = temp_dir / "config.yaml"
        _ = path.write_text(
            "sysctl_path: 42\nreport_soft_failures: 'yes'\nunknown: 1\n"
        )

        assert load_config(path) == TuneupConfig()

    @pytest.mark.parametrize("content", ["- a\n- b\n", "just a string\n", "42\n"])
    def test_non_mapping_file(self, temp_dir: Path, content: str) -> None:
        """Test that a top level list or scalar means defaults."""
        path = temp_dir / "config.yaml"
        _ = path.write_text(content)

        assert load_config(path) == TuneupConfig()

    def test_empty_file(self, temp_dir: Path) -> None:
        """Test an empty config file."""
        path = temp_dir / "config.yaml"
        _ = path.write_text("")

        assert load_config(path) == TuneupConfig()

    def test_missing_explicit_path(self, temp_dir: Path) -> None:
        """Test that a missing file means defaults."""
        assert load_config(temp_dir / "nope.yaml") == TuneupConfig()
