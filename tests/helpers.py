"""Builders shared by the test modules."""

import json
import subprocess
from typing import Any, Optional

from inspec_exporter.core.exceptions import ScrapeError
from inspec_exporter.core.models import ModuleConfig


def make_report(controls: list[dict[str, Any]], duration: float = 0.25, version: str = "5.22.3") -> bytes:
    """Build a json-min reporter document."""
    return json.dumps({
        "controls": controls,
        "statistics": {"duration": duration},
        "version": version,
    }).encode()


def make_control(code_desc: str, status: str = "passed", **extra: Any) -> dict[str, Any]:
    control = {
        "id": extra.pop("id", "ctl-1"),
        "profile_id": "sample",
        "profile_sha256": "4f0b0a6c",
        "status": status,
        "code_desc": code_desc,
    }
    control.update(extra)
    return control


def completed(returncode: int, stdout: bytes = b"") -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=["inspec"], returncode=returncode, stdout=stdout)


class FakeInvoker:
    """Stands in for AuditorInvoker without spawning a process."""

    def __init__(self, output: bytes = b"", error: Optional[ScrapeError] = None):
        self.output = output
        self.error = error
        self.calls: list[tuple[str, ModuleConfig]] = []

    def invoke(self, target: str, config: ModuleConfig) -> bytes:
        self.calls.append((target, config))
        if self.error is not None:
            raise self.error
        return self.output
