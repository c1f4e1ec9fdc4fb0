"""Record adapter layer — Pluggable loaders for the records behind search hits.

Built-in adapters:
  - sqlalchemy: SQLAlchemy 2.x mapped classes (select by primary key)
  - default: any class exposing ``find(ids)``

Implement ``RecordAdapter`` and register it to support another datastore.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from recordsift.adapters.base.adapter import RecordAdapter
from recordsift.adapters.base.registry import AdapterRegistry
from recordsift.adapters.default.adapter import DefaultAdapter
from recordsift.adapters.sqlalchemy.adapter import SQLAlchemyAdapter

if TYPE_CHECKING:
    from recordsift.config.settings import RecordsSettings


def build_registry(settings: RecordsSettings | None = None) -> AdapterRegistry:
    """Create a registry holding the built-in adapters.

    Args:
        settings: Records settings. Uses defaults if None.
    """
    preserve_hit_order = settings.preserve_hit_order if settings else True
    registry = AdapterRegistry()
    registry.register(SQLAlchemyAdapter(preserve_hit_order=preserve_hit_order))
    registry.set_default(DefaultAdapter())
    if settings and settings.default_adapter != "default":
        registry.set_default(registry.get(settings.default_adapter))
    return registry


registry = build_registry()


def from_class(klass: type) -> RecordAdapter:
    """Resolve the adapter for ``klass`` from the module-level registry."""
    return registry.from_class(klass)


__all__ = ["AdapterRegistry", "RecordAdapter", "build_registry", "from_class", "registry"]
