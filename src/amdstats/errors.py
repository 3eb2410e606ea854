"""Exception types raised by the loading, aggregation and rendering layers."""
from __future__ import annotations


class AmdStatsError(RuntimeError):
    """Base class for every error reported by amdstats."""


class DataSourceError(AmdStatsError):
    """Raised when a sample list is missing, unreadable or not in the expected layout."""


class SchemaError(AmdStatsError):
    """Raised when a table lacks a column an operation needs."""


class EmptyInputError(AmdStatsError):
    """Raised when an aggregation needs a year span but has no rows to derive it from."""


class ConfigurationError(AmdStatsError):
    """Raised when a category in the data has no entry in the category/color configuration."""
