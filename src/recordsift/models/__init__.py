"""Search response models."""

from recordsift.models.hit import Hit
from recordsift.models.response import ResponseStructureError, Result, Results, SearchResponse

__all__ = ["Hit", "ResponseStructureError", "Result", "Results", "SearchResponse"]
