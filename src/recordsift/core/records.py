"""Records — The datastore records behind a search response, joined with its hits.

A ``Records`` collection wraps the records an adapter loads for the hits of
a search response. It behaves like a sequence of those records, pairs each
record with its hit, and forwards any other attribute to the underlying
record container. Calls listed in the adapter's ``deferred_methods`` are not
forwarded; they are stored and replayed later onto a query builder.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Iterator, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, NamedTuple, TypeVar

from recordsift.models.response import ResponseStructureError

if TYPE_CHECKING:
    from recordsift.adapters.base.adapter import RecordAdapter, RecordSet
    from recordsift.models.response import Results, SearchResponse

logger = logging.getLogger(__name__)

_T = TypeVar("_T")


class DeferredCall(NamedTuple):
    """A call withheld from the records, replayed later by name."""

    name: str
    args: tuple[Any, ...] = ()
    kwargs: Mapping[str, Any] = MappingProxyType({})

    def apply(self, target: Any) -> Any:
        """Invoke the call on ``target`` and return the result."""
        return getattr(target, self.name)(*self.args, **self.kwargs)


class Records:
    """Collection of datastore records for a search response.

    Args:
        klass: The record class the search was run for.
        response: The search response. Must expose the raw body as
            ``response.response`` and a ``results()`` accessor.
        adapter: The record adapter. Resolved from ``klass`` when omitted.
        **options: Adapter options (e.g. ``session`` for SQLAlchemy).

    Example::

        records = Records(Article, response, session=session)
        records.order_by(Article.title)      # deferred
        for article, hit in zip(records, records.results()):
            ...
    """

    def __init__(
        self,
        klass: type,
        response: SearchResponse,
        adapter: RecordAdapter | None = None,
        **options: Any,
    ) -> None:
        if adapter is None:
            from recordsift.adapters import from_class

            adapter = from_class(klass)

        self.klass = klass
        self.response = response
        self.adapter_options = options
        self._adapter = adapter
        self._records: RecordSet | None = None
        self._deferred_calls: dict[str, DeferredCall] = {}

    # ── Records ──────────────────────────────────────────────────────────

    @property
    def adapter(self) -> RecordAdapter:
        return self._adapter

    @property
    def records(self) -> RecordSet:
        """The underlying records, loaded by the adapter on first access."""
        if self._records is None:
            self._records = self._adapter.records(self)
        return self._records

    @property
    def deferred_methods(self) -> frozenset[str]:
        """Names that are stored instead of forwarded to the records."""
        return self._adapter.deferred_methods

    @property
    def deferred_calls(self) -> Mapping[str, DeferredCall]:
        """Read-only view of the calls waiting to be replayed."""
        return MappingProxyType(self._deferred_calls)

    # ── Hits ─────────────────────────────────────────────────────────────

    def ids(self) -> list[Any]:
        """Return the ``_id`` of every hit, in response order.

        Raises:
            ResponseStructureError: If the response has no ``hits.hits`` list.
        """
        try:
            return [hit["_id"] for hit in self.response.response["hits"]["hits"]]
        except (KeyError, TypeError) as e:
            raise ResponseStructureError(f"Malformed search response, cannot read hit ids: {e!r}") from e

    def results(self) -> Results:
        """Return the response's results."""
        return self.response.results()

    def each_with_hit(self, fn: Callable[[Any, Any], Any]) -> None:
        """Call ``fn(record, hit)`` for each record and its hit.

        Stops at the shorter of the records and the results.
        """
        for record, hit in zip(self.to_list(), self.results()):
            fn(record, hit)

    def map_with_hit(self, fn: Callable[[Any, Any], _T]) -> list[_T]:
        """Return ``[fn(record, hit), ...]`` for each record and its hit."""
        return [fn(record, hit) for record, hit in zip(self.to_list(), self.results())]

    # ── Sequence surface ─────────────────────────────────────────────────

    def __iter__(self) -> Iterator[Any]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)

    def __bool__(self) -> bool:
        return not self.is_empty()

    def __getitem__(self, index: int | slice) -> Any:
        return self.records[index]

    def size(self) -> int:
        return len(self.records)

    def is_empty(self) -> bool:
        return len(self.records) == 0

    def to_list(self) -> list[Any]:
        return list(self.records)

    # ── Forwarding ───────────────────────────────────────────────────────

    def responds_to(self, name: str) -> bool:
        """Return True if ``name`` is defined here, by the adapter, or on the records."""
        if name.startswith("_"):
            return hasattr(type(self), name) or name in self.__dict__
        # Own attributes first: adapters calling back into the collection while
        # loading records must not re-enter the forwarding path.
        if hasattr(type(self), name) or name in self.__dict__:
            return True
        if name in self._adapter.operations():
            return True
        return hasattr(self.records, name)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_") or name == "records":
            raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")

        operation = self._adapter.operations().get(name)
        if operation is not None:
            return functools.partial(operation, self)

        records = self.records
        if not hasattr(records, name):
            raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")

        if name in self.deferred_methods:
            return functools.partial(self._defer, name)
        return getattr(records, name)

    def __dir__(self) -> list[str]:
        names = set(super().__dir__())
        names.update(self._adapter.operations())
        if self._records is not None:
            names.update(n for n in dir(self._records) if not n.startswith("_"))
        return sorted(names)

    def _defer(self, name: str, *args: Any, **kwargs: Any) -> Records:
        self._deferred_calls[name] = DeferredCall(name, args, MappingProxyType(dict(kwargs)))
        logger.debug("Deferred %s() on records for %s", name, self.klass)
        return self

    def _apply_deferred_calls(self, criteria: Any) -> Any:
        """Replay the deferred calls onto ``criteria`` and return the result.

        Each call is made on the value returned by the previous one.
        """
        for call in self._deferred_calls.values():
            criteria = call.apply(criteria)
        return criteria

    def __repr__(self) -> str:
        loaded = "loaded" if self._records is not None else "pending"
        return f"<Records klass={getattr(self.klass, '__name__', self.klass)} adapter={self._adapter.name} {loaded}>"
