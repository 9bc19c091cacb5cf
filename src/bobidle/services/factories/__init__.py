"""Factories that wire repositories and services together."""

from .economy_factory import (
    EconomyComponents,
    build_economy_components,
    build_http_gateway,
    build_reconciliation_store,
)

__all__ = [
    "EconomyComponents",
    "build_economy_components",
    "build_http_gateway",
    "build_reconciliation_store",
]
