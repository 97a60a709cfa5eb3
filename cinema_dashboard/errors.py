"""
Exception hierarchy for the cinema dashboard backend.
"""
from __future__ import annotations


class DashboardError(Exception):
    """Base class for errors raised by this package."""


class CatalogLoadError(DashboardError):
    """The movie catalog could not be fetched, read or parsed."""


__all__ = ["DashboardError", "CatalogLoadError"]
