"""Warehouse exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class WarehouseError(Exception):
    """Base exception for all warehouse failures."""


class WarehouseConfigError(WarehouseError):
    """Raised for invalid runtime configuration."""


class WarehouseIngestError(WarehouseError):
    """Raised for raw record parsing and loading failures."""


class WarehouseStoreError(WarehouseError):
    """Raised for record persistence failures."""


class WarehouseNoIdentifierError(WarehouseStoreError):
    """Raised in strict mode when a record carries no natural id."""


class WarehouseQueryPatternError(WarehouseError):
    """Raised when a query value is not a valid regular expression."""


class WarehouseDependencyError(WarehouseError):
    """Raised when an optional runtime dependency is missing."""
