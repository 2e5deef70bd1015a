"""Tests for KbSettings — unified settings with TOML source."""

from pathlib import Path

import click
import pytest

from kbcheck.config.models import DEFAULT_LOG_FILE
from kbcheck.config.settings import KbSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("KBCHECK_CONFIG", "KBCHECK_HTTP__TIMEOUT_SECONDS", "KBCHECK_KUBECTL__CONTEXT"):
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = KbSettings.from_cli(work_dir=tmp_path)
        assert settings.work_dir == tmp_path
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.kubectl.binary == "kubectl"
        assert settings.kubectl.context is None
        assert settings.http.timeout_seconds is None
        assert settings.http.verify is False
        assert settings.checks.require_pod_match is False
        assert settings.log.file == DEFAULT_LOG_FILE

    def test_log_path_relative_to_work_dir(self, tmp_path: Path) -> None:
        settings = KbSettings.from_cli(work_dir=tmp_path)
        assert settings.log_path == tmp_path / DEFAULT_LOG_FILE

    def test_frozen(self, tmp_path: Path) -> None:
        settings = KbSettings.from_cli(work_dir=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_sections(self, tmp_path: Path) -> None:
        (tmp_path / "kbcheck.toml").write_text(
            '[kubectl]\ncontext = "staging"\n[http]\ntimeout_seconds = 10\n'
            '[log]\nfile = "/var/log/kbcheck.log"\n'
        )
        settings = KbSettings.from_cli(work_dir=tmp_path)
        assert settings.config_path == (tmp_path / "kbcheck.toml").resolve()
        assert settings.kubectl.context == "staging"
        assert settings.kubectl.binary == "kubectl"
        assert settings.http.timeout_seconds == 10
        assert settings.log_path == Path("/var/log/kbcheck.log")

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir()
        custom.write_text("[checks]\nrequire_pod_match = true\n")
        settings = KbSettings.from_cli(config_path=str(custom), work_dir=tmp_path)
        assert settings.checks.require_pod_match is True
        assert settings.config_path == custom

    def test_invalid_toml_raises_click_exception(self, tmp_path: Path) -> None:
        (tmp_path / "kbcheck.toml").write_text("[kubectl\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            KbSettings.from_cli(work_dir=tmp_path)


class TestPriority:
    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "kbcheck.toml").write_text('[kubectl]\ncontext = "staging"\n')
        monkeypatch.setenv("KBCHECK_KUBECTL__CONTEXT", "prod")
        settings = KbSettings.from_cli(work_dir=tmp_path)
        assert settings.kubectl.context == "prod"

    def test_cli_flags_override_toml(self, tmp_path: Path) -> None:
        (tmp_path / "kbcheck.toml").write_text("quiet = true\n")
        settings = KbSettings.from_cli(work_dir=tmp_path, quiet=False)
        assert settings.quiet is False
