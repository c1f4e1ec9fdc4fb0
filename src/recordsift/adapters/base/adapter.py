"""Base record adapter — Abstract interface for all datastore connectors.

Every datastore integration must implement this interface so that a
``Records`` collection can load the records behind a search response.
The adapter is responsible for:
  1. Deciding whether it can handle a given record class
  2. Fetching the records that correspond to the hits of a response
  3. Declaring which calls are deferred until the records are loaded
  4. Exposing extra, datastore-specific operations on the collection
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator, Mapping
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from recordsift.core.records import Records


@runtime_checkable
class RecordSet(Protocol):
    """Protocol for the record containers adapters hand back."""

    def __iter__(self) -> Iterator[Any]: ...

    def __len__(self) -> int: ...

    def __getitem__(self, index: Any) -> Any: ...


Operation = Callable[..., Any]
"""An adapter operation; receives the ``Records`` collection as first argument."""


class RecordAdapter(ABC):
    """Abstract base class for datastore adapters.

    All adapters must implement:
      - name: Unique adapter name
      - handles(): Whether the adapter supports a record class
      - records(): Load the records for a ``Records`` collection

    Adapters may override ``deferred_methods`` and ``operations()``. Both
    are empty by default, so the base form forwards every call immediately.
    """

    deferred_methods: frozenset[str] = frozenset()

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique adapter name (e.g., 'default', 'sqlalchemy')."""

    @abstractmethod
    def handles(self, klass: type) -> bool:
        """Return True if this adapter can load records of ``klass``."""

    @abstractmethod
    def records(self, collection: Records) -> RecordSet:
        """Load the records behind a search response.

        Args:
            collection: The collection asking for its records. Adapters read
                ``klass``, ``ids()`` and ``adapter_options`` from it.

        Returns:
            A sequence of records, possibly lazy.

        Raises:
            RecordFetchError: If the records cannot be fetched.
        """

    def operations(self) -> Mapping[str, Operation]:
        """Extra operations exposed on ``Records`` collections using this adapter."""
        return {}

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r}>"
