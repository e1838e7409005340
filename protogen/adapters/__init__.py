"""Adapters — tool bindings for external programs.

Public re-exports for convenient access.
"""

from protogen.adapters.base import Adapter, ExecutionContext
from protogen.adapters.mock import MockAdapter
from protogen.adapters.registry import AdapterRegistry, default_registry

__all__ = [
    "Adapter",
    "AdapterRegistry",
    "ExecutionContext",
    "MockAdapter",
    "default_registry",
]
