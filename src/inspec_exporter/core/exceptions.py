"""Custom exceptions for the InSpec exporter.

Configuration problems abort a request before the auditor is started,
scrape problems are contained to the collector that hit them.
"""

from __future__ import annotations


class InspecExporterError(Exception):
    """Base exception for all InSpec exporter errors.

    All custom exceptions inherit from this class, allowing callers to
    catch every exporter-specific error with a single except clause.
    """
    pass


class ConfigurationError(InspecExporterError):
    """Raised when a request cannot be mapped to a runnable module.

    This includes failures in:
    - Locating the global profile directory
    - Resolving a named module to a profile on disk
    """
    pass


class ProfilePathError(ConfigurationError):
    """Raised when the global profile path is unset or missing."""
    pass


class UnknownModuleError(ConfigurationError):
    """Raised when a module has no profile on disk."""

    def __init__(self, module: str, path: str = ""):
        self.module = module
        self.path = path
        super().__init__(f"Unknown module '{module}'")


class ScrapeError(InspecExporterError):
    """Raised while producing a scrape result for one module.

    This includes failures in:
    - Starting the auditor process
    - Non-zero exit statuses other than the "checks failed" status
    - Decoding the reporter output
    """
    pass


class InvocationError(ScrapeError):
    """Raised when the auditor cannot be run or exits with a fatal status."""

    def __init__(self, message: str, exit_code: int | None = None, output: bytes = b""):
        self.exit_code = exit_code
        self.output = output
        super().__init__(message)


class DecodeError(ScrapeError):
    """Raised when the auditor output is not a valid report document."""
    pass
