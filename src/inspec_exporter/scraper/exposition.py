"""Bridge scrape collectors into prometheus_client exposition."""

from __future__ import annotations

from typing import Iterable, Iterator

from prometheus_client import CollectorRegistry, generate_latest
from prometheus_client.core import GaugeMetricFamily

from inspec_exporter.core.logging import get_logger
from inspec_exporter.core.models import MetricTuple
from inspec_exporter.scraper.collector import ScrapeCollector

logger = get_logger(__name__)


class TupleCollector:
    """A prometheus_client collector fed by ScrapeCollectors.

    Tuples sharing a name across modules (the duration gauge, the error
    marker) are merged into one family. A sample whose name and labels
    were already emitted is dropped, first one wins.
    """

    def __init__(self, collectors: Iterable[ScrapeCollector]):
        self.collectors = list(collectors)

    def describe(self) -> list:
        # Nothing is known until the auditor has run
        return []

    def tuples(self) -> Iterator[MetricTuple]:
        for collector in self.collectors:
            yield from collector.collect()

    def collect(self) -> Iterator[GaugeMetricFamily]:
        families: dict[str, GaugeMetricFamily] = {}
        label_names: dict[str, tuple[str, ...]] = {}
        emitted: set[tuple[str, tuple[str, ...]]] = set()

        for metric in self.tuples():
            names = tuple(sorted(metric.labels))
            values = tuple(metric.labels[name] for name in names)

            family = families.get(metric.name)
            if family is None:
                family = GaugeMetricFamily(metric.name, metric.help, labels=list(names))
                families[metric.name] = family
                label_names[metric.name] = names
            elif label_names[metric.name] != names or (metric.name, values) in emitted:
                logger.warning("duplicate_metric_dropped", metric=metric.name, labels=dict(metric.labels))
                continue

            emitted.add((metric.name, values))
            family.add_metric(list(values), metric.value)

        yield from families.values()


def build_registry(collectors: Iterable[ScrapeCollector]) -> CollectorRegistry:
    """Return a fresh registry holding the given collectors."""
    registry = CollectorRegistry(auto_describe=False)
    registry.register(TupleCollector(collectors))
    return registry


def render(collectors: Iterable[ScrapeCollector]) -> bytes:
    """Run the collectors and render the Prometheus text format."""
    return generate_latest(build_registry(collectors))
