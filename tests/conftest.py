"""Test configuration and fixtures for the InSpec exporter."""

from pathlib import Path

import pytest

from inspec_exporter.core.config import Settings
from inspec_exporter.core.logging import reset_logging
from inspec_exporter.core.metrics import ExporterMetrics
from inspec_exporter.core.models import ModuleConfig

from helpers import make_control, make_report


@pytest.fixture
def scenario_report() -> bytes:
    """Two checks sharing a description plus one skipped check."""
    return make_report([
        make_control("Check A", "passed", id="a-1"),
        make_control("Check A", "failed", id="a-2"),
        make_control("Check B/2", "skipped", id="b-1"),
    ])


@pytest.fixture
def sample_module() -> ModuleConfig:
    return ModuleConfig(name="sample", prefix="sample_", path="/profiles/sample")


@pytest.fixture
def metrics() -> ExporterMetrics:
    """Exporter metrics on their own registry."""
    return ExporterMetrics(version="test")


@pytest.fixture
def profile_dir(tmp_path: Path) -> Path:
    """Profile directory holding two profiles."""
    root = tmp_path / "profiles"
    for name in ("sample", "linux-baseline"):
        (root / name).mkdir(parents=True)
        (root / name / "inspec.yml").write_text(f"name: {name}\n")
    return root


@pytest.fixture
def settings(profile_dir: Path) -> Settings:
    """Settings pointing at the temporary profile directory."""
    return Settings(profile_path=str(profile_dir), inspec_path="inspec")


@pytest.fixture
def config_file(tmp_path: Path, profile_dir: Path) -> Path:
    """YAML configuration file with one explicit module section."""
    import yaml

    path = tmp_path / "inspec.yaml"
    with open(path, "w") as f:
        yaml.dump({
            "inspec_path": "inspec",
            "profile_path": str(profile_dir),
            "modules": {
                "sample": {
                    "path": str(profile_dir / "sample"),
                    "prefix": "sample_",
                    "ssh_user": "audit",
                    "ssh_port": 2222,
                },
            },
        }, f)
    return path


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop handlers that commands under test bound to their own stderr."""
    yield
    reset_logging()
