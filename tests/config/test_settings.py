"""Tests for IfsSettings — unified settings with TOML source."""

from pathlib import Path

import click
import pytest
from pydantic import ValidationError

from ifsctl.config.settings import IfsSettings


class TestIfsSettingsDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        """With no TOML and no env vars, all fields use code defaults."""
        settings = IfsSettings.from_cli(project_root=tmp_path)
        assert settings.project_root == tmp_path
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.quiet is False
        assert settings.generator.max_instances == 100_000
        assert settings.grid.step == 0.333
        assert settings.grid.tolerance == 0.001
        assert settings.share.param == "c"
        assert settings.generated.fallback_name == "AI Generated Fractal"

    def test_frozen(self, tmp_path: Path) -> None:
        settings = IfsSettings.from_cli(project_root=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_sparse_override(self, tmp_path: Path) -> None:
        """Only overridden fields change; the rest keep defaults."""
        (tmp_path / "ifsctl.toml").write_text("[grid]\nstep = 0.25\n")
        settings = IfsSettings.from_cli(project_root=tmp_path)
        assert settings.grid.step == 0.25
        assert settings.grid.tolerance == 0.001
        assert settings.config_path == tmp_path / "ifsctl.toml"

    def test_walks_up_to_find_toml(self, tmp_path: Path) -> None:
        (tmp_path / "ifsctl.toml").write_text("[generator]\nmax_instances = 500\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        settings = IfsSettings.from_cli(project_root=nested)
        assert settings.generator.max_instances == 500

    def test_project_root_from_config_dir(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "ifsctl.toml").write_text("")
        nested = tmp_path / "sub"
        nested.mkdir()
        monkeypatch.chdir(nested)
        settings = IfsSettings.from_cli()
        assert settings.project_root == (tmp_path / "ifsctl.toml").resolve().parent

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text('[share]\nbase_url = "https://example.org/b"\n')
        settings = IfsSettings.from_cli(config_path=str(custom), project_root=tmp_path)
        assert settings.share.base_url == "https://example.org/b"
        assert settings.config_path == custom

    def test_generated_section(self, tmp_path: Path) -> None:
        (tmp_path / "ifsctl.toml").write_text('[generated]\niterations = 3\nfallback_name = "Bot"\n')
        settings = IfsSettings.from_cli(project_root=tmp_path)
        assert settings.generated.iterations == 3
        assert settings.generated.fallback_name == "Bot"
        assert settings.generated.default_scale == 0.5

    def test_rejects_non_positive_step(self, tmp_path: Path) -> None:
        (tmp_path / "ifsctl.toml").write_text("[grid]\nstep = 0\n")
        with pytest.raises(ValidationError):
            IfsSettings.from_cli(project_root=tmp_path)

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "ifsctl.toml").write_text("[grid\nstep = ")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            IfsSettings.from_cli(project_root=tmp_path)


class TestPriority:
    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "ifsctl.toml").write_text("[grid]\nstep = 0.25\n")
        monkeypatch.setenv("IFSCTL_GRID__STEP", "0.5")
        settings = IfsSettings.from_cli(project_root=tmp_path)
        assert settings.grid.step == 0.5

    def test_cli_flags_override_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("IFSCTL_QUIET", "false")
        settings = IfsSettings.from_cli(project_root=tmp_path, quiet=True)
        assert settings.quiet is True
