"""Configuration management using Pydantic Settings."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ModuleSettings(BaseModel):
    """Explicit settings for one module section.

    Every field defaults to its zero value. Fields missing from a section
    are not taken from the global defaults unless ``inherit_defaults`` is
    enabled on the parent settings.
    """

    path: str = Field(
        default="",
        description="Filesystem path to the audit profile"
    )

    prefix: str = Field(
        default="",
        description="Prefix for every metric emitted by this module"
    )

    ssh_user: str = Field(
        default="",
        description="User for the ssh:// target URI"
    )

    ssh_identity_file: str = Field(
        default="",
        description="Private key passed to the auditor with -i"
    )

    ssh_port: int = Field(
        default=0,
        ge=0,
        le=65535,
        description="Port for the ssh:// target URI (0 leaves it out)"
    )

    need_sudo: bool = Field(
        default=False,
        description="Run remote checks with --sudo"
    )


class Settings(BaseSettings):
    """Main configuration container."""

    model_config = SettingsConfigDict(
        env_prefix="INSPEC_EXPORTER_",
        env_nested_delimiter="__",
        case_sensitive=False,
        frozen=True,
    )

    inspec_path: str = Field(
        default="inspec",
        description="Path or name of the inspec executable"
    )

    profile_path: str = Field(
        default="",
        description="Directory holding one profile per module"
    )

    # Web server
    listen_address: str = Field(
        default="0.0.0.0",
        description="Address to listen on for web interface and telemetry"
    )

    listen_port: int = Field(
        default=9124,
        ge=1,
        le=65535,
        description="Port to listen on for web interface and telemetry"
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Minimum log level"
    )

    log_json: bool = Field(
        default=False,
        description="Emit JSON log lines instead of console output"
    )

    log_file: str = Field(
        default="",
        description="Also write log lines to this file (empty disables it)"
    )

    # Modules
    inherit_defaults: bool = Field(
        default=False,
        description="Fill fields missing from a module section from 'defaults'"
    )

    defaults: ModuleSettings = Field(default_factory=ModuleSettings)

    modules: dict[str, ModuleSettings] = Field(
        default_factory=dict,
        description="Explicit module sections keyed by module name"
    )

    @classmethod
    def from_yaml(cls, path: Path) -> "Settings":
        """Load settings from a YAML configuration file."""
        import yaml

        if not path.exists():
            return cls()

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)

    @classmethod
    def find_config(cls, path: Path | None = None) -> Path | None:
        """Return the first configuration file that exists."""
        if path and path.exists():
            return path

        for default_path in default_config_paths():
            if default_path.exists():
                return default_path

        return None

    @classmethod
    def from_file_or_default(cls, path: Path | None = None) -> "Settings":
        """Load from file if exists, otherwise return defaults."""
        found = cls.find_config(path)
        if found is None:
            return cls()
        return cls.from_yaml(found)


def default_config_paths() -> list[Path]:
    return [
        Path("inspec.yaml"),
        Path("inspec.yml"),
        Path("/etc/inspec_exporter/inspec.yaml"),
        Path.home() / ".inspec_exporter" / "inspec.yaml",
    ]
