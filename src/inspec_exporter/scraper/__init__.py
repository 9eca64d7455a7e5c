"""Scraper module - Auditor invocation, report parsing, and gauge rendering."""

from inspec_exporter.scraper.collector import ScrapeCollector, build_collectors
from inspec_exporter.scraper.exposition import TupleCollector, render
from inspec_exporter.scraper.invoker import AuditorInvoker
from inspec_exporter.scraper.parser import parse_report

__all__ = [
    "AuditorInvoker",
    "ScrapeCollector",
    "TupleCollector",
    "build_collectors",
    "parse_report",
    "render",
]
