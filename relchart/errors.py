# relchart/errors.py
from __future__ import annotations


class DataShapeError(ValueError):
    """Raised when loaded data is not a sequence of records."""


class DataLoadError(RuntimeError):
    """Raised when no configured data source could be loaded."""


class DateParseFailure(ValueError):
    """A record date could not be parsed (per-record, non-fatal)."""


class SizeParseFailure(ValueError):
    """A modelSize string yielded no numeric B-values (per-record, non-fatal)."""


class ConfigError(ValueError):
    """Raised for unreadable config files or unknown presets."""


__all__ = [
    "DataShapeError",
    "DataLoadError",
    "DateParseFailure",
    "SizeParseFailure",
    "ConfigError",
]
