"""Search hit model — A single entry of a search response's ``hits.hits``."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Hit(BaseModel):
    """A search hit.

    Underscore-prefixed keys of the raw hit are exposed under plain names
    (``_id`` -> ``id``). Any other key (``highlight``, ``sort``,
    ``inner_hits``, ...) is kept as an extra field.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str = Field(alias="_id", description="Document identifier")
    index: str | None = Field(default=None, alias="_index", description="Index the document lives in")
    score: float | None = Field(default=None, alias="_score", description="Relevance score")
    source: dict[str, Any] = Field(default_factory=dict, alias="_source", description="Stored document fields")

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> Hit:
        """Build a hit from a raw response entry, stringifying numeric ids."""
        data = dict(raw)
        if isinstance(data.get("_id"), int) and not isinstance(data["_id"], bool):
            data["_id"] = str(data["_id"])
        return cls.model_validate(data)
