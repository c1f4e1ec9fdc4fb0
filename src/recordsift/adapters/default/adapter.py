"""Default adapter — Loads records through a ``find`` class method.

Used for any record class no other adapter claims. The class is expected
to expose ``find(ids)`` returning the records for a list of hit ids.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from recordsift.adapters.base.adapter import RecordAdapter
from recordsift.adapters.base.exceptions import RecordFetchError

if TYPE_CHECKING:
    from recordsift.core.records import Records

logger = logging.getLogger(__name__)


class DefaultAdapter(RecordAdapter):
    """Adapter calling ``klass.find(ids)``."""

    @property
    def name(self) -> str:
        return "default"

    def handles(self, klass: type) -> bool:
        return True

    def records(self, collection: Records) -> list[Any]:
        finder = getattr(collection.klass, "find", None)
        if not callable(finder):
            raise RecordFetchError(f"{collection.klass!r} does not define a callable find(ids).")

        ids = collection.ids()
        logger.debug("Fetching %d records for %s", len(ids), collection.klass)
        return list(finder(ids))
