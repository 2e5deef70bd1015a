"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``KBCHECK_*`` prefix, ``__`` for nested sections
  3. TOML file    — ``kbcheck.toml`` discovered via walk-up
  4. Code defaults — baked into the section models
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from kbcheck.config.discovery import find_config
from kbcheck.config.models import ChecksConfig, HttpConfig, KubectlConfig, LogConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Feed a parsed ``kbcheck.toml`` into the settings merge."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path is None or not toml_path.is_file():
            return
        try:
            self._data = tomllib.loads(toml_path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as exc:
            raise click.ClickException(f"Invalid TOML in {toml_path}: {exc}") from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# The TOML path has to reach settings_customise_sources, which is a
# classmethod invoked from inside __init__.
_tls = threading.local()


class KbSettings(BaseSettings):
    """Settings for a single kbcheck invocation.

    Built once by the root CLI group and stored on the Click context.

    Attributes:
        work_dir: Directory the log file is resolved against.
        config_path: The TOML file that was loaded, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "KBCHECK_",
        "env_nested_delimiter": "__",
    }

    work_dir: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    no_interact: bool = False

    # --- TOML sections ---
    kubectl: KubectlConfig = Field(default_factory=KubectlConfig)
    http: HttpConfig = Field(default_factory=HttpConfig)
    log: LogConfig = Field(default_factory=LogConfig)
    checks: ChecksConfig = Field(default_factory=ChecksConfig)

    @property
    def log_path(self) -> Path:
        """Checklist log location; relative names resolve against work_dir."""
        path = Path(self.log.file)
        return path if path.is_absolute() else self.work_dir / path

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, getattr(_tls, "toml_path", None)),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        work_dir: Path | None = None,
        **cli_flags: Any,
    ) -> KbSettings:
        """Construct settings from a CLI invocation.

        An explicit *config_path* that does not exist is ignored rather than
        falling back to discovery.
        """
        toml_path: Path | None
        if config_path:
            candidate = Path(config_path)
            toml_path = candidate if candidate.is_file() else None
        else:
            toml_path = find_config(work_dir)

        _tls.toml_path = toml_path
        try:
            return cls(
                work_dir=work_dir or Path.cwd(),
                config_path=toml_path,
                **cli_flags,
            )
        finally:
            _tls.toml_path = None
