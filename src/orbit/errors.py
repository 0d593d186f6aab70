"""Exception hierarchy for Orbit.

Aggregators let these propagate to the HTTP layer; the migrator catches
them per table and records them in its report.
"""

from __future__ import annotations


class OrbitError(Exception):
    """Base class for all Orbit errors."""


class ConfigError(OrbitError):
    """Required configuration is missing or malformed."""


class MissingReferenceError(OrbitError):
    """An aggregated group points at a row that does not exist."""

    def __init__(self, table: str, keys: list[int]):
        self.table = table
        self.keys = keys
        super().__init__(f"{table} rows not found for ids {keys}")


class DependencyGraphError(OrbitError):
    """The declared table dependency graph is inconsistent."""


class MigrationAbortedError(OrbitError):
    """The migration cannot start (e.g. a database is unreachable)."""


class TableNotFoundError(OrbitError):
    """A table to migrate does not exist in the source database."""
