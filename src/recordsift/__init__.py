"""recordsift — Join search engine hits with the datastore records they point to."""

from recordsift.config.settings import Settings
from recordsift.core.records import DeferredCall, Records
from recordsift.models.response import ResponseStructureError, Result, Results, SearchResponse
from recordsift.observability.logging import setup_logging

__version__ = "0.1.0"

__all__ = [
    "DeferredCall",
    "Records",
    "ResponseStructureError",
    "Result",
    "Results",
    "SearchResponse",
    "Settings",
    "__version__",
    "configure",
]


def configure(settings: Settings | None = None) -> Settings:
    """Configure logging and the adapter registry from ``settings``.

    Args:
        settings: Settings to apply. Loaded from the environment if None.

    Returns:
        The applied settings.
    """
    from recordsift import adapters

    settings = settings or Settings()
    setup_logging(settings.observability)
    adapters.registry = adapters.build_registry(settings.records)
    return settings
