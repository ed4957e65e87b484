"""
Resource handlers for the administration API.

This package provides the handler interface, the resource type registry
and the built-in billing plan handler.
"""

from resources.base import (
    DriftResult,
    ReconcileResult,
    ResourceHandler,
    ResourceState,
)

__all__ = [
    "DriftResult",
    "ReconcileResult",
    "ResourceHandler",
    "ResourceState",
]
