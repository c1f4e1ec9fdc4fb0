"""Shared test fixtures and configuration."""

from __future__ import annotations

from typing import Any

import pytest

from recordsift.config.settings import Settings


@pytest.fixture
def settings() -> Settings:
    """Create a test Settings instance with defaults."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        observability={"log_format": "console"},
    )


@pytest.fixture
def raw_response() -> dict[str, Any]:
    """A search response body with three hits."""
    return {
        "took": 4,
        "timed_out": False,
        "_shards": {"total": 1, "successful": 1, "skipped": 0, "failed": 0},
        "hits": {
            "total": {"value": 3, "relation": "eq"},
            "max_score": 2.5,
            "hits": [
                {
                    "_index": "articles",
                    "_id": "3",
                    "_score": 2.5,
                    "_source": {"title": "Solar Nowcasting with Deep Learning", "year": 2023},
                    "highlight": {"title": ["<em>Solar</em> Nowcasting"]},
                },
                {
                    "_index": "articles",
                    "_id": "1",
                    "_score": 1.75,
                    "_source": {"title": "Turbulence Modeling Revisited", "year": 2019},
                },
                {
                    "_index": "articles",
                    "_id": "2",
                    "_score": 0.5,
                    "_source": {"title": "Wind Farm Layout Optimization", "year": 2021},
                },
            ],
        },
    }


@pytest.fixture
def empty_response() -> dict[str, Any]:
    """A search response body without hits."""
    return {"took": 1, "timed_out": False, "hits": {"total": {"value": 0}, "max_score": None, "hits": []}}
