"""Shared fixtures for unit tests."""

import pytest

from spatial_collection.config import CollectionConfig, SpatialContextConfig
from spatial_collection.context import SpatialContext


@pytest.fixture
def ctx() -> SpatialContext:
    """Unbounded Euclidean context."""
    return SpatialContext(SpatialContextConfig(geo=False), CollectionConfig())


@pytest.fixture
def geo_ctx() -> SpatialContext:
    """Geographic (longitude/latitude) context."""
    return SpatialContext(SpatialContextConfig(geo=True), CollectionConfig())
