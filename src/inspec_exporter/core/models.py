"""Data models for the InSpec exporter."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator


PASSED = "passed"


class ModuleConfig(BaseModel):
    """How to audit one profile for one request."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Module name the config was resolved from")
    prefix: str = Field(..., min_length=1, description="Prefix for every emitted metric name")
    path: str = Field(..., description="Filesystem path to the audit profile")

    # Remote connection
    ssh_user: str = ""
    ssh_identity_file: str = ""
    ssh_port: int = 0
    need_sudo: bool = False


class CheckOutcome(BaseModel):
    """A single control result from the json-min reporter."""

    model_config = ConfigDict(extra="ignore")

    id: str = ""
    profile_id: str = ""
    profile_sha256: str = ""
    status: str = ""
    code_desc: str = ""
    message: str = ""
    skip_message: str = ""
    resource: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def _null_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @property
    def passed(self) -> bool:
        return self.status == PASSED


class Statistics(BaseModel):
    """Run statistics as reported by the auditor."""

    model_config = ConfigDict(extra="ignore")

    duration: float = 0.0
    version: str = ""

    @field_validator("duration", mode="before")
    @classmethod
    def _null_to_zero(cls, value: Any) -> Any:
        return 0.0 if value is None else value


class ScrapeResult(BaseModel):
    """Parsed outcome of one auditor invocation."""

    controls: list[CheckOutcome] = Field(default_factory=list)
    statistics: Statistics = Field(default_factory=Statistics)

    @property
    def control_count(self) -> int:
        return len(self.controls)


@dataclass(frozen=True)
class MetricTuple:
    """A gauge sample handed to the exposition layer."""

    name: str
    help: str
    value: float
    labels: Mapping[str, str] = field(default_factory=dict)
