"""Core module - Configuration, models, and module resolution."""

from inspec_exporter.core.config import ModuleSettings, Settings
from inspec_exporter.core.models import CheckOutcome, MetricTuple, ModuleConfig, ScrapeResult
from inspec_exporter.core.modules import resolve_all, resolve_module
from inspec_exporter.core.normalizer import normalize

__all__ = [
    "Settings",
    "ModuleSettings",
    "CheckOutcome",
    "MetricTuple",
    "ModuleConfig",
    "ScrapeResult",
    "resolve_all",
    "resolve_module",
    "normalize",
]
