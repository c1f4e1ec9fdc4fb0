"""SQLAlchemy adapter — Loads records for mapped classes from a relational database.

Records are selected by primary key with ``select(klass).where(pk.in_(ids))``
through the ``session`` option of the collection. ``order_by``, ``where``,
``filter`` and ``options`` called on the collection are deferred and
replayed onto that select when the records are loaded.

Unless an ordering was requested, rows come back in the order of the hits.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING, Any

from sqlalchemy import Select, inspect, select
from sqlalchemy.orm import Mapper, Session

from recordsift.adapters.base.adapter import Operation, RecordAdapter
from recordsift.adapters.base.exceptions import ConfigurationError, RecordFetchError

if TYPE_CHECKING:
    from recordsift.core.records import Records

logger = logging.getLogger(__name__)


class SQLRecords:
    """Lazy, chainable set of rows selected for a ``Records`` collection.

    The select is only executed on first iteration, length or index access.
    ``order_by``, ``where``, ``filter`` and ``options`` return a new, unloaded
    ``SQLRecords`` with the refined select.

    Args:
        session: Session used to execute the select.
        statement: The select before deferred calls are replayed.
        collection: The owning collection; supplies hit ids and deferred calls.
        key: Attribute holding the primary key on loaded rows.
        ordered: Whether ``statement`` already carries an explicit ordering.
        preserve_hit_order: Sort unordered rows by hit position.
    """

    def __init__(
        self,
        session: Session,
        statement: Select[Any],
        collection: Records,
        key: str,
        ordered: bool = False,
        preserve_hit_order: bool = True,
    ) -> None:
        self._session = session
        self._statement = statement
        self._collection = collection
        self._key = key
        self._ordered = ordered
        self._preserve_hit_order = preserve_hit_order
        self._rows: list[Any] | None = None

    @property
    def statement(self) -> Select[Any]:
        """The select with the collection's deferred calls applied."""
        return self._collection._apply_deferred_calls(self._statement)

    @property
    def loaded(self) -> bool:
        return self._rows is not None

    @property
    def ordered(self) -> bool:
        return self._ordered or "order_by" in self._collection.deferred_calls

    def load(self) -> SQLRecords:
        """Execute the select unless it already ran."""
        if self._rows is None:
            try:
                rows = list(self._session.scalars(self.statement))
            except Exception as e:
                raise RecordFetchError(f"Failed to load records for {self._collection.klass!r}: {e}") from e

            if self._preserve_hit_order and not self.ordered:
                positions = {str(hit_id): i for i, hit_id in enumerate(self._collection.ids())}
                rows.sort(key=lambda row: positions.get(str(getattr(row, self._key)), len(positions)))

            logger.debug("Loaded %d %s rows", len(rows), self._collection.klass)
            self._rows = rows
        return self

    def reload(self) -> SQLRecords:
        """Discard loaded rows and execute the select again."""
        self._rows = None
        return self.load()

    # ── Refinement ───────────────────────────────────────────────────────

    def _refine(self, statement: Select[Any], ordered: bool | None = None) -> SQLRecords:
        return SQLRecords(
            self._session,
            statement,
            self._collection,
            self._key,
            ordered=self._ordered if ordered is None else ordered,
            preserve_hit_order=self._preserve_hit_order,
        )

    def order_by(self, *clauses: Any) -> SQLRecords:
        return self._refine(self._statement.order_by(*clauses), ordered=True)

    def where(self, *criteria: Any) -> SQLRecords:
        return self._refine(self._statement.where(*criteria))

    def filter(self, *criteria: Any) -> SQLRecords:
        return self.where(*criteria)

    def options(self, *options: Any) -> SQLRecords:
        return self._refine(self._statement.options(*options))

    # ── Sequence surface ─────────────────────────────────────────────────

    def _loaded_rows(self) -> list[Any]:
        self.load()
        assert self._rows is not None
        return self._rows

    def __iter__(self) -> Iterator[Any]:
        return iter(self._loaded_rows())

    def __len__(self) -> int:
        return len(self._loaded_rows())

    def __getitem__(self, index: int | slice) -> Any:
        return self._loaded_rows()[index]

    def to_list(self) -> list[Any]:
        return list(self._loaded_rows())

    def __repr__(self) -> str:
        state = f"{len(self._rows)} rows" if self._rows is not None else "not loaded"
        return f"<SQLRecords {self._collection.klass.__name__} {state}>"


class SQLAlchemyAdapter(RecordAdapter):
    """Adapter for SQLAlchemy mapped classes.

    The collection must be created with a ``session`` option. Classes with
    a composite primary key are not supported.

    Args:
        preserve_hit_order: Return unordered rows in the order of the hits.
    """

    deferred_methods = frozenset({"order_by", "where", "filter", "options"})

    def __init__(self, preserve_hit_order: bool = True) -> None:
        self._preserve_hit_order = preserve_hit_order

    @property
    def name(self) -> str:
        return "sqlalchemy"

    def handles(self, klass: type) -> bool:
        return isinstance(klass, type) and isinstance(inspect(klass, raiseerr=False), Mapper)

    def records(self, collection: Records) -> SQLRecords:
        session = collection.adapter_options.get("session")
        if session is None:
            raise ConfigurationError(
                f"The sqlalchemy adapter needs a 'session' option to load {collection.klass!r} records."
            )

        mapper: Mapper[Any] = inspect(collection.klass)
        if len(mapper.primary_key) != 1:
            raise ConfigurationError(f"{collection.klass!r} has a composite primary key, which is not supported.")
        column = mapper.primary_key[0]
        key = mapper.get_property_by_column(column).key

        ids = self._coerce_ids(column, collection.ids())
        statement = select(collection.klass).where(column.in_(ids))
        return SQLRecords(
            session,
            statement,
            collection,
            key,
            preserve_hit_order=self._preserve_hit_order,
        )

    def operations(self) -> Mapping[str, Operation]:
        return {"statement": _statement}

    @staticmethod
    def _coerce_ids(column: Any, ids: list[Any]) -> list[Any]:
        """Convert hit ids (usually strings) to the primary key's Python type."""
        try:
            python_type = column.type.python_type
        except NotImplementedError:
            return list(ids)
        try:
            return [hit_id if isinstance(hit_id, python_type) else python_type(hit_id) for hit_id in ids]
        except (TypeError, ValueError) as e:
            raise RecordFetchError(f"Hit ids do not match the primary key type {python_type.__name__}: {e}") from e


def _statement(collection: Records) -> Select[Any]:
    """Return the composed select for ``collection`` without executing it."""
    return collection.records.statement
