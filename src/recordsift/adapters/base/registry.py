"""Adapter Registry — Resolves the record adapter for a record class.

Adapters are consulted in registration order; the first one that handles a
class wins. Classes nobody claims fall back to the default adapter.
"""

from __future__ import annotations

import logging

from recordsift.adapters.base.adapter import RecordAdapter

logger = logging.getLogger(__name__)


class AdapterNotFoundError(Exception):
    """Raised when a requested adapter is not registered."""


class AdapterRegistry:
    """Registry of record adapters.

    Example:
        >>> registry = AdapterRegistry(default=DefaultAdapter())
        >>> registry.register(SQLAlchemyAdapter())
        >>> registry.from_class(Article)
        <SQLAlchemyAdapter name='sqlalchemy'>
    """

    def __init__(self, default: RecordAdapter | None = None) -> None:
        self._adapters: dict[str, RecordAdapter] = {}
        self._default = default

    def register(self, adapter: RecordAdapter) -> None:
        """Register an adapter under its ``name``.

        Args:
            adapter: The adapter instance to register.
        """
        if adapter.name in self._adapters:
            logger.warning("Overwriting existing adapter registration: %s", adapter.name)
        self._adapters[adapter.name] = adapter
        logger.debug("Registered record adapter: %s", adapter.name)

    def get(self, name: str) -> RecordAdapter:
        """Get a registered adapter by name.

        Raises:
            AdapterNotFoundError: If no adapter is registered under this name.
        """
        if self._default is not None and self._default.name == name:
            return self._default
        if name not in self._adapters:
            raise AdapterNotFoundError(
                f"No adapter registered with name '{name}'. "
                f"Available adapters: {self.registered_adapters}"
            )
        return self._adapters[name]

    def set_default(self, adapter: RecordAdapter) -> None:
        """Use ``adapter`` for classes no registered adapter handles."""
        self._default = adapter

    def from_class(self, klass: type) -> RecordAdapter:
        """Return the adapter for ``klass``.

        Raises:
            AdapterNotFoundError: If nothing handles the class and no default is set.
        """
        for adapter in self._adapters.values():
            if adapter.handles(klass):
                logger.debug("Resolved adapter %s for %s", adapter.name, klass)
                return adapter
        if self._default is None:
            raise AdapterNotFoundError(f"No adapter handles {klass!r} and no default adapter is set.")
        return self._default

    @property
    def default(self) -> RecordAdapter | None:
        return self._default

    @property
    def registered_adapters(self) -> list[str]:
        """List all registered adapter names."""
        return list(self._adapters.keys())
