"""Base adapter interface — Abstract classes for datastore record adapters."""

from recordsift.adapters.base.adapter import RecordAdapter, RecordSet
from recordsift.adapters.base.registry import AdapterNotFoundError, AdapterRegistry

__all__ = ["AdapterNotFoundError", "AdapterRegistry", "RecordAdapter", "RecordSet"]
