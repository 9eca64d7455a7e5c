"""Map free-text check descriptions to Prometheus metric identifiers.

The pipeline is order sensitive:

1. path separators become ``_``
2. safe-name sanitization (lowercase, ASCII, allow-list ``[a-z0-9.-]``)
3. ``-`` becomes ``_``
4. ``_.`` becomes ``_dot_``
5. remaining ``.`` become ``_``

Every output matches ``[a-zA-Z_][a-zA-Z0-9_]*``.
"""

from __future__ import annotations

import re
import unicodedata

PATH_SEPARATORS = re.compile(r"[/\\]")

# Joining characters that read as word breaks
JOINERS = re.compile(r"[\s&_=+:]")

# Allow-list: anything else is dropped
ILLEGAL = re.compile(r"[^a-z0-9.\-]")

DASHES = re.compile(r"-+")
UNDERSCORES = re.compile(r"_+")


def flatten_accents(text: str) -> str:
    """Decompose accented characters and drop what is left outside ASCII."""
    decomposed = unicodedata.normalize("NFKD", text)
    return decomposed.encode("ascii", "ignore").decode("ascii")


def safe_name(text: str) -> str:
    """Reduce ``text`` to lowercase ASCII letters, digits, dots and dashes."""
    name = text.lower().strip()
    name = flatten_accents(name)
    name = JOINERS.sub("-", name)
    name = ILLEGAL.sub("", name)
    return DASHES.sub("-", name)


def normalize(description: str) -> str:
    """Return a metric-safe identifier for a check description.

    Identical inputs always give identical outputs, which is what the
    collector relies on to detect duplicate checks.
    """
    name = PATH_SEPARATORS.sub("_", description)
    name = safe_name(name)
    name = name.replace("-", "_")
    name = name.replace("_.", "_dot_")
    name = name.replace(".", "_")
    name = UNDERSCORES.sub("_", name)

    if not name or name[0].isdigit():
        name = "_" + name

    return name


def metric_prefix(value: str) -> str:
    """Return ``value`` as a metric name prefix ending in ``_``."""
    prefix = normalize(value)
    if not prefix.endswith("_"):
        prefix += "_"
    return prefix
