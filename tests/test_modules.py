"""Tests for module config resolution."""

import os
from pathlib import Path

import pytest

from inspec_exporter.core.config import ModuleSettings, Settings
from inspec_exporter.core.exceptions import (
    ConfigurationError,
    ProfilePathError,
    UnknownModuleError,
)
from inspec_exporter.core.modules import (
    build_module,
    ensure_profile_path,
    resolve_all,
    resolve_module,
)


class TestResolveModule:
    """Tests for single-module resolution."""

    def test_synthetic_default(self, settings: Settings, profile_dir: Path):
        """A module without a section runs its profile locally with no credentials."""
        module = resolve_module("sample", settings)

        assert module.name == "sample"
        assert module.prefix == "sample_"
        assert module.path == os.path.join(str(profile_dir), "sample")
        assert module.ssh_user == ""
        assert module.ssh_identity_file == ""
        assert module.ssh_port == 0
        assert module.need_sudo is False

    def test_synthetic_prefix_sanitized(self, settings: Settings):
        assert resolve_module("linux-baseline", settings).prefix == "linux_baseline_"

    def test_explicit_section(self, settings: Settings, profile_dir: Path):
        settings = settings.model_copy(update={"modules": {"sample": ModuleSettings(
            path=str(profile_dir / "sample"),
            prefix="base_",
            ssh_user="root",
            ssh_identity_file="/keys/id_rsa",
            ssh_port=2222,
            need_sudo=True,
        )}})

        module = resolve_module("sample", settings)

        assert module.prefix == "base_"
        assert module.ssh_user == "root"
        assert module.ssh_identity_file == "/keys/id_rsa"
        assert module.ssh_port == 2222
        assert module.need_sudo is True

    def test_explicit_section_zero_values(self, profile_dir: Path):
        """Fields missing from a section are zero, not the global defaults."""
        settings = Settings(
            profile_path=str(profile_dir),
            defaults={"ssh_user": "audit", "ssh_port": 22, "need_sudo": True},
            modules={"sample": {"path": str(profile_dir / "sample")}},
        )

        module = resolve_module("sample", settings)

        assert module.ssh_user == ""
        assert module.ssh_port == 0
        assert module.need_sudo is False

    def test_explicit_section_without_prefix(self, profile_dir: Path):
        """The prefix falls back to the module name so it is never empty."""
        settings = Settings(
            profile_path=str(profile_dir),
            modules={"sample": {"path": str(profile_dir / "sample")}},
        )

        assert resolve_module("sample", settings).prefix == "sample_"

    def test_explicit_prefix_sanitized(self, profile_dir: Path):
        settings = Settings(
            profile_path=str(profile_dir),
            modules={"sample": {"path": str(profile_dir / "sample"), "prefix": "CIS-Level.1"}},
        )

        assert resolve_module("sample", settings).prefix == "cis_level_1_"

    def test_inherit_defaults(self, profile_dir: Path):
        """With inheritance on, only missing fields come from the defaults."""
        settings = Settings(
            profile_path=str(profile_dir),
            inherit_defaults=True,
            defaults={"ssh_user": "audit", "ssh_port": 22, "ssh_identity_file": "/keys/audit"},
            modules={"sample": {"path": str(profile_dir / "sample"), "ssh_user": "root"}},
        )

        module = resolve_module("sample", settings)

        assert module.ssh_user == "root"
        assert module.ssh_port == 22
        assert module.ssh_identity_file == "/keys/audit"

    def test_unknown_module(self, settings: Settings):
        with pytest.raises(UnknownModuleError) as exc_info:
            resolve_module("nope", settings)

        assert exc_info.value.module == "nope"
        assert "Unknown module 'nope'" in str(exc_info.value)

    def test_explicit_section_with_missing_path(self, profile_dir: Path):
        settings = Settings(
            profile_path=str(profile_dir),
            modules={"ghost": {"prefix": "ghost_"}},
        )

        with pytest.raises(UnknownModuleError):
            resolve_module("ghost", settings)

    def test_missing_profile_path(self, tmp_path: Path):
        with pytest.raises(ProfilePathError):
            resolve_module("sample", Settings(profile_path=str(tmp_path / "missing")))

    def test_empty_profile_path(self):
        with pytest.raises(ConfigurationError):
            resolve_module("sample", Settings(profile_path=""))


class TestResolveAll:
    """Tests for batch resolution."""

    def test_one_module_per_entry(self, settings: Settings):
        modules = resolve_all(settings)

        assert [m.name for m in modules] == ["linux-baseline", "sample"]
        assert [m.prefix for m in modules] == ["linux_baseline_", "sample_"]

    def test_uses_explicit_sections(self, profile_dir: Path):
        settings = Settings(
            profile_path=str(profile_dir),
            modules={"sample": {"path": str(profile_dir / "sample"), "prefix": "s_", "need_sudo": True}},
        )

        modules = {m.name: m for m in resolve_all(settings)}

        assert modules["sample"].prefix == "s_"
        assert modules["sample"].need_sudo is True
        assert modules["linux-baseline"].need_sudo is False

    def test_broken_section_not_filtered(self, profile_dir: Path):
        """Batch mode leaves broken modules to fail in their collector."""
        settings = Settings(
            profile_path=str(profile_dir),
            modules={"sample": {"prefix": "s_"}},
        )

        modules = {m.name: m for m in resolve_all(settings)}

        assert modules["sample"].path == ""

    def test_empty_directory(self, tmp_path: Path):
        assert resolve_all(Settings(profile_path=str(tmp_path))) == []

    def test_missing_profile_path(self):
        with pytest.raises(ProfilePathError):
            resolve_all(Settings(profile_path="/does/not/exist"))


class TestHelpers:
    """Tests for the lower-level helpers."""

    def test_ensure_profile_path(self, settings: Settings, profile_dir: Path):
        assert ensure_profile_path(settings) == profile_dir

    def test_build_module_does_not_touch_disk(self, tmp_path: Path):
        settings = Settings(profile_path=str(tmp_path / "missing"))

        module = build_module("sample", settings)

        assert module.path.endswith("sample")
