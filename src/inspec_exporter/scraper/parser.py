"""Decode json-min reporter output into a ScrapeResult."""

from __future__ import annotations

from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
)

from inspec_exporter.core.exceptions import DecodeError
from inspec_exporter.core.models import CheckOutcome, ScrapeResult, Statistics


class _ReportStatistics(BaseModel):
    model_config = ConfigDict(extra="ignore")

    duration: float | None = None


class InspecReport(BaseModel):
    """Wire shape of ``inspec exec --reporter json-min``."""

    model_config = ConfigDict(extra="ignore")

    controls: list[CheckOutcome] = Field(default_factory=list)
    statistics: _ReportStatistics = Field(default_factory=_ReportStatistics)
    version: str = ""

    @field_validator("controls", "statistics", "version", mode="before")
    @classmethod
    def _null_to_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is not None:
            return value
        return {"controls": [], "statistics": {}, "version": ""}[info.field_name]

    def to_result(self) -> ScrapeResult:
        return ScrapeResult(
            controls=self.controls,
            statistics=Statistics(
                duration=self.statistics.duration or 0.0,
                version=self.version,
            ),
        )


def parse_report(raw: bytes | str) -> ScrapeResult:
    """Parse reporter output.

    Raises:
        DecodeError: If the payload is not a JSON object of the expected
            shape. Nothing is salvaged from a partially valid document.
    """
    try:
        report = InspecReport.model_validate_json(raw)
    except ValidationError as e:
        raise DecodeError(f"Invalid inspec output: {_first_error(e)}") from e

    return report.to_result()


def _first_error(error: ValidationError) -> str:
    errors = error.errors()
    if not errors:
        return str(error)
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    if location:
        return f"{location}: {first.get('msg', '')}"
    return first.get("msg", "")
