"""Per-request scrape collector: one auditor run rendered as gauges."""

from __future__ import annotations

import time
from typing import Iterator, Optional

from inspec_exporter.core.config import Settings
from inspec_exporter.core.exceptions import ScrapeError
from inspec_exporter.core.logging import log_scrape_event
from inspec_exporter.core.metrics import ExporterMetrics
from inspec_exporter.core.models import MetricTuple, ModuleConfig, ScrapeResult
from inspec_exporter.core.modules import resolve_all, resolve_module
from inspec_exporter.core.normalizer import normalize
from inspec_exporter.scraper.invoker import AuditorInvoker
from inspec_exporter.scraper.parser import parse_report

ERROR_METRIC = "inspec_error"
DURATION_METRIC = "inspec_scrape_duration_seconds"

# Summary gauges share the prefix with check gauges
RESERVED_SUFFIXES = frozenset({"total_returned", "total_passed", "duplicates"})

# Fixed names carrying a module label; a prefixed check must not take them
RESERVED_NAMES = frozenset({ERROR_METRIC, DURATION_METRIC})


class ScrapeCollector:
    """Runs the auditor for one (target, module) pair and yields gauges.

    The collector holds no state between ``collect()`` calls; each pass
    runs the auditor again and tracks duplicates on its own.
    """

    def __init__(
        self,
        target: str,
        module: ModuleConfig,
        invoker: AuditorInvoker,
        metrics: Optional[ExporterMetrics] = None,
    ):
        self.target = target
        self.module = module
        self.invoker = invoker
        self.metrics = metrics

    def scrape(self) -> ScrapeResult:
        """Invoke the auditor and parse its report."""
        raw = self.invoker.invoke(self.target, self.module)
        return parse_report(raw)

    def collect(self) -> Iterator[MetricTuple]:
        start = time.perf_counter()
        labels = {"module": self.module.name}

        try:
            result = self.scrape()
        except ScrapeError as e:
            log_scrape_event(
                "scrape_failed",
                self.target,
                self.module.name,
                level="error",
                error=str(e),
                exit_code=getattr(e, "exit_code", None),
            )
            if self.metrics is not None:
                self.metrics.record_error()
            yield MetricTuple(ERROR_METRIC, f"Error scraping target: {e}", 1.0, labels)
            return

        yield from self.render(result)

        duration = time.perf_counter() - start
        log_scrape_event(
            "scrape_finished",
            self.target,
            self.module.name,
            level="debug",
            controls=result.control_count,
            seconds=round(duration, 3),
        )
        yield MetricTuple(DURATION_METRIC, "Time inspec took.", duration, labels)

    def render(self, result: ScrapeResult) -> Iterator[MetricTuple]:
        """Yield the summary and per-check gauges for a parsed result."""
        prefix = self.module.prefix
        seen: set[str] = set(RESERVED_SUFFIXES)
        passed = 0
        duplicates = 0

        yield MetricTuple(
            f"{prefix}total_returned",
            "Tests returned from scrape process.",
            float(result.control_count),
        )

        for check in result.controls:
            identifier = normalize(check.code_desc)
            name = f"{prefix}{identifier}"
            if identifier in seen or name in RESERVED_NAMES:
                duplicates += 1
                continue
            seen.add(identifier)

            if check.passed:
                passed += 1
            yield MetricTuple(
                name,
                check.code_desc,
                1.0 if check.passed else 0.0,
            )

        yield MetricTuple(f"{prefix}total_passed", "Tests passed.", float(passed))
        yield MetricTuple(
            f"{prefix}duplicates",
            "Tests dropped because their metric name was already used.",
            float(duplicates),
        )


def build_collectors(
    target: str,
    module: str,
    settings: Settings,
    metrics: Optional[ExporterMetrics] = None,
) -> list[ScrapeCollector]:
    """Resolve the modules for one request and wrap each in a collector.

    An empty ``module`` selects every profile under ``profile_path``.

    Raises:
        ConfigurationError: If the profile path or the named module is
            missing. No collector is built in that case.
    """
    invoker = AuditorInvoker(settings.inspec_path)

    if module:
        configs = [resolve_module(module, settings)]
    else:
        configs = resolve_all(settings)

    return [ScrapeCollector(target, config, invoker, metrics) for config in configs]
