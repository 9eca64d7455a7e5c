"""Metrics about the exporter itself.

Everything is registered on a registry owned by ``ExporterMetrics``
rather than on prometheus_client's process-wide default registry.
"""

from __future__ import annotations

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Info,
    PlatformCollector,
    ProcessCollector,
    Summary,
    generate_latest,
)


class ExporterMetrics:
    """Self-metrics served on ``/metrics``.

    Usage:
        metrics = ExporterMetrics()
        metrics.request_errors.inc()
        body = metrics.render()
    """

    def __init__(self, registry: CollectorRegistry | None = None, version: str = "") -> None:
        self.registry = registry or CollectorRegistry()

        # Duration of whole /inspec requests, per requested module ("" for all)
        self.collection_duration = Summary(
            "inspec_collection_duration_seconds",
            "Duration of collections by the inspec exporter",
            ["module"],
            registry=self.registry,
        )

        self.request_errors = Counter(
            "inspec_request_errors",
            "Errors in requests to the inspec exporter",
            registry=self.registry,
        )

        self.build_info = Info(
            "inspec_exporter_build",
            "Build information of the inspec exporter",
            registry=self.registry,
        )
        if version:
            self.build_info.info({"version": version})

        ProcessCollector(registry=self.registry)
        PlatformCollector(registry=self.registry)

    def record_error(self) -> None:
        self.request_errors.inc()

    def observe_collection(self, module: str, seconds: float) -> None:
        self.collection_duration.labels(module=module).observe(seconds)

    @property
    def error_count(self) -> float:
        value = self.registry.get_sample_value("inspec_request_errors_total")
        return value or 0.0

    def render(self) -> bytes:
        return generate_latest(self.registry)
