"""Unified settings: CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs: CLI flags passed by Click
  2. Env vars: ``WORKON_*`` prefix (``WORKON_ROOTS`` is a
     ``os.pathsep``-separated list)
  3. TOML file: found by :func:`workon.config.discovery.find_config`
  4. Code defaults: section models, and ``$GOPATH/src`` for the roots

Services never read these sources themselves: the CLI builds one
:class:`WorkonSettings` and hands explicit values down.
"""

from __future__ import annotations

import os
import threading
import tomllib
from pathlib import Path
from typing import Annotated, Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, PydanticBaseSettingsSource

from workon.config.discovery import find_config, load_config_data
from workon.config.models import LaunchConfig, ResolverConfig, WorkspaceConfig


def gopath_roots() -> list[Path]:
    """Source directories of every ``$GOPATH`` entry, in order."""
    gopath = os.environ.get("GOPATH", "")
    return [Path(entry) / "src" for entry in gopath.split(os.pathsep) if entry]


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from the workon TOML config file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        try:
            self._data = load_config_data(toml_path)
        except tomllib.TOMLDecodeError as exc:
            import click

            msg = f"Invalid TOML in {toml_path}: {exc}"
            raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for the TOML path during construction.
_tls = threading.local()


class WorkonSettings(BaseSettings):
    """Settings for one workon invocation, frozen after construction.

    Attributes:
        roots: Ordered module search roots.  Empty means nothing is
            configured, which the CLI treats as fatal.
        config_path: The TOML file the settings were read from, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "WORKON_",
        "env_nested_delimiter": "__",
    }

    roots: Annotated[list[Path], NoDecode] = Field(default_factory=gopath_roots)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    resolver: ResolverConfig = Field(default_factory=ResolverConfig)
    launch: LaunchConfig = Field(default_factory=LaunchConfig)
    workspace: WorkspaceConfig = Field(default_factory=WorkspaceConfig)

    @field_validator("roots", mode="before")
    @classmethod
    def _split_roots(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [entry for entry in value.split(os.pathsep) if entry]
        return value

    @field_validator("roots")
    @classmethod
    def _expand_roots(cls, value: list[Path]) -> list[Path]:
        return [p.expanduser() for p in value]

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        **cli_flags: Any,
    ) -> WorkonSettings:
        """Construct settings for a CLI invocation.

        Uses *config_path* when given, otherwise discovers the config file,
        and merges CLI flags as highest-priority overrides.
        """
        toml_path = Path(config_path) if config_path else find_config()

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **cli_flags)
        finally:
            _tls.toml_path = None
