"""Adapter-specific exceptions."""


class AdapterError(Exception):
    """Base exception for adapter errors."""


class ConfigurationError(AdapterError):
    """Raised when an adapter is missing a required option or is misconfigured."""


class RecordFetchError(AdapterError):
    """Raised when records cannot be fetched for a search response."""
