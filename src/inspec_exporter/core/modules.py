"""Resolve module names to execution configs."""

from __future__ import annotations

import os
from pathlib import Path

from inspec_exporter.core.config import ModuleSettings, Settings
from inspec_exporter.core.exceptions import ProfilePathError, UnknownModuleError
from inspec_exporter.core.models import ModuleConfig
from inspec_exporter.core.normalizer import metric_prefix


def ensure_profile_path(settings: Settings) -> Path:
    """Return the global profile directory or raise ProfilePathError."""
    if not settings.profile_path or not Path(settings.profile_path).exists():
        raise ProfilePathError(
            "'profile_path' in config is empty or does not exist"
        )
    return Path(settings.profile_path)


def _section_for(name: str, settings: Settings) -> ModuleSettings | None:
    section = settings.modules.get(name)
    if section is None or not settings.inherit_defaults:
        return section

    # Only fields absent from the section come from the defaults block
    merged = settings.defaults.model_dump()
    merged.update(section.model_dump(include=section.model_fields_set))
    return ModuleSettings(**merged)


def build_module(name: str, settings: Settings) -> ModuleConfig:
    """Build the config for ``name`` without checking the profile exists.

    An explicit section is read field by field; a field missing from it
    keeps its zero value. Without a section the profile is expected at
    ``<profile_path>/<name>`` and no remote credentials are used.
    """
    section = _section_for(name, settings)

    if section is None:
        return ModuleConfig(
            name=name,
            prefix=metric_prefix(name),
            path=os.path.join(settings.profile_path, name),
        )

    return ModuleConfig(
        name=name,
        prefix=metric_prefix(section.prefix or name),
        path=section.path,
        ssh_user=section.ssh_user,
        ssh_identity_file=section.ssh_identity_file,
        ssh_port=section.ssh_port,
        need_sudo=section.need_sudo,
    )


def resolve_module(name: str, settings: Settings) -> ModuleConfig:
    """Resolve a single module.

    Raises:
        ProfilePathError: If the global profile path is missing.
        UnknownModuleError: If the module's profile is not on disk.
    """
    ensure_profile_path(settings)

    module = build_module(name, settings)
    if not module.path or not Path(module.path).exists():
        raise UnknownModuleError(name, module.path)

    return module


def resolve_all(settings: Settings) -> list[ModuleConfig]:
    """Resolve one module per entry in the global profile directory.

    Broken modules are not filtered here; they fail inside their own
    collector so the rest of the batch still reports.
    """
    root = ensure_profile_path(settings)

    try:
        entries = sorted(entry.name for entry in root.iterdir())
    except OSError as e:
        raise ProfilePathError(f"'profile_path' is not readable: {e}") from e

    return [build_module(name, settings) for name in entries]
