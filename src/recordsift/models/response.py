"""Search response model — Wraps a raw search engine response body.

``SearchResponse`` holds the decoded JSON body of a search request and
exposes its hits as ``Results`` and the matching datastore records as
``Records``.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from typing import TYPE_CHECKING, Any, overload

from pydantic import ValidationError

from recordsift.models.hit import Hit

if TYPE_CHECKING:
    from recordsift.adapters.base.adapter import RecordAdapter
    from recordsift.core.records import Records


class ResponseStructureError(Exception):
    """Raised when a search response body lacks the expected structure."""


def _hits(raw: Any) -> list[dict[str, Any]]:
    try:
        hits = raw["hits"]["hits"]
    except (KeyError, TypeError) as e:
        raise ResponseStructureError(f"Search response has no hits.hits: {e!r}") from e
    if not isinstance(hits, list):
        raise ResponseStructureError(f"hits.hits must be a list, got {type(hits).__name__}")
    for position, hit in enumerate(hits):
        if not isinstance(hit, Mapping):
            raise ResponseStructureError(f"hits.hits[{position}] must be an object, got {type(hit).__name__}")
    return hits


class Result:
    """A single search hit.

    Attribute access resolves in the hit's ``_source`` first, then in the
    raw hit itself, so ``result.title`` and ``result.highlight`` both work.
    """

    def __init__(self, hit: dict[str, Any]) -> None:
        self._raw = hit
        self._hit = Hit.from_raw(hit)

    @property
    def hit(self) -> Hit:
        return self._hit

    @property
    def id(self) -> str:
        return self._hit.id

    @property
    def index(self) -> str | None:
        return self._hit.index

    @property
    def score(self) -> float | None:
        return self._hit.score

    @property
    def source(self) -> dict[str, Any]:
        return self._hit.source

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")
        source = self._hit.source
        if name in source:
            return source[name]
        if name in self._raw:
            return self._raw[name]
        raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")

    def __getitem__(self, key: str) -> Any:
        return self._raw[key]

    def to_dict(self) -> dict[str, Any]:
        return dict(self._raw)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Result):
            return NotImplemented
        return self._raw == other._raw

    def __hash__(self) -> int:
        return hash((self._hit.index, self._hit.id))

    def __repr__(self) -> str:
        return f"<Result id={self.id!r} score={self.score!r}>"


class Results(Sequence[Result]):
    """The hits of a search response, as ``Result`` objects."""

    def __init__(self, response: SearchResponse) -> None:
        self.response = response
        try:
            self._results = [Result(hit) for hit in _hits(response.response)]
        except ValidationError as e:
            raise ResponseStructureError(f"Invalid hit in search response: {e}") from e

    @overload
    def __getitem__(self, index: int) -> Result: ...

    @overload
    def __getitem__(self, index: slice) -> list[Result]: ...

    def __getitem__(self, index: int | slice) -> Result | list[Result]:
        return self._results[index]

    def __len__(self) -> int:
        return len(self._results)

    def __iter__(self) -> Iterator[Result]:
        return iter(self._results)

    @property
    def total(self) -> int:
        return self.response.total

    @property
    def max_score(self) -> float | None:
        return self.response.max_score

    def __repr__(self) -> str:
        return f"<Results size={len(self)} total={self.total}>"


class SearchResponse:
    """A search response for a record class.

    Args:
        klass: The record class the search was run for.
        raw: The decoded response body.
        **options: Options handed to the ``Records`` collection.
    """

    def __init__(self, klass: type, raw: dict[str, Any], **options: Any) -> None:
        self.klass = klass
        self.response = raw
        self.adapter_options = options
        self._results: Results | None = None
        self._records: Records | None = None

    def results(self) -> Results:
        """Return the hits as ``Results`` (built once)."""
        if self._results is None:
            self._results = Results(self)
        return self._results

    def records(self, adapter: RecordAdapter | None = None, **options: Any) -> Records:
        """Return the datastore records for the hits (built once).

        Args:
            adapter: Record adapter to use; resolved from ``klass`` when omitted.
            **options: Adapter options, merged over the response options.
        """
        if self._records is None:
            from recordsift.core.records import Records

            self._records = Records(self.klass, self, adapter=adapter, **{**self.adapter_options, **options})
        return self._records

    @property
    def total(self) -> int:
        """Total number of matches; accepts both ``n`` and ``{"value": n}`` forms."""
        total = (self.response.get("hits") or {}).get("total", 0)
        if isinstance(total, dict):
            return int(total.get("value", 0))
        return int(total or 0)

    @property
    def max_score(self) -> float | None:
        return (self.response.get("hits") or {}).get("max_score")

    @property
    def took(self) -> int | None:
        return self.response.get("took")

    @property
    def timed_out(self) -> bool:
        return bool(self.response.get("timed_out", False))

    @property
    def shards(self) -> dict[str, Any]:
        return self.response.get("_shards", {})

    @property
    def aggregations(self) -> dict[str, Any]:
        return self.response.get("aggregations", {})

    @property
    def suggestions(self) -> dict[str, Any]:
        return self.response.get("suggest", {})

    def __repr__(self) -> str:
        return f"<SearchResponse klass={getattr(self.klass, '__name__', self.klass)} total={self.total}>"
