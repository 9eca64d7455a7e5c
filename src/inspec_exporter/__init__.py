"""InSpec Exporter - Prometheus metrics from on-demand InSpec runs."""

__version__ = "0.3.0"

from inspec_exporter.core.config import Settings
from inspec_exporter.core.models import MetricTuple, ModuleConfig, ScrapeResult

__all__ = [
    "Settings",
    "MetricTuple",
    "ModuleConfig",
    "ScrapeResult",
]
