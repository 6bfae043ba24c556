"""Configuration and constants for spatial contexts and shape collections.

Includes configuration for:
- Coordinate domain of the spatial context (SpatialContextConfig with SPATIAL_ prefix)
- Shape collection behaviour (CollectionConfig with COLLECTION_ prefix)

Configuration can be overridden via:
1. Environment variables (e.g., SPATIAL_GEO=true, COLLECTION_RENDER_MAX_CHARS=300)
2. .env file in the current directory
3. Default values in code
"""

import math
from dataclasses import dataclass

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


@dataclass(frozen=True)
class GeoConstants:
    """Fixed limits of the geographic (longitude/latitude) coordinate domain.

    These are NOT configurable. Geographic contexts always use these bounds.
    """

    MIN_LON: float = -180.0
    MAX_LON: float = 180.0
    MIN_LAT: float = -90.0
    MAX_LAT: float = 90.0
    LON_SPAN: float = 360.0

    # Radius of a unit sphere expressed in degrees, used for spherical areas
    RADIUS_DEG: float = 180.0 / math.pi


# Module-level singleton for geographic constants
GEO = GeoConstants()


class SpatialContextConfig(BaseSettings):
    """Coordinate domain used by a SpatialContext.

    Can be overridden via environment variables with SPATIAL_ prefix:
    - SPATIAL_GEO
    - SPATIAL_MIN_X, SPATIAL_MAX_X, SPATIAL_MIN_Y, SPATIAL_MAX_Y

    Attributes:
        geo: Geographic (wrapping longitude) rather than Euclidean coordinates
        min_x: Lower world bound on the x axis
        max_x: Upper world bound on the x axis
        min_y: Lower world bound on the y axis
        max_y: Upper world bound on the y axis

    Note:
        World bounds are ignored when geo is enabled; the geographic limits in
        GEO always apply.
    """

    model_config = SettingsConfigDict(
        env_prefix="SPATIAL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    geo: bool = Field(default=False, description="Use geographic longitude/latitude coordinates")
    min_x: float = Field(default=-math.inf, description="World lower bound on x")
    max_x: float = Field(default=math.inf, description="World upper bound on x")
    min_y: float = Field(default=-math.inf, description="World lower bound on y")
    max_y: float = Field(default=math.inf, description="World upper bound on y")

    @model_validator(mode="after")
    def apply_world_bounds(self) -> "SpatialContextConfig":
        if self.geo:
            self.min_x, self.max_x = GEO.MIN_LON, GEO.MAX_LON
            self.min_y, self.max_y = GEO.MIN_LAT, GEO.MAX_LAT
        if self.min_x > self.max_x or self.min_y > self.max_y:
            msg = (
                f"World bounds are inverted: x [{self.min_x}, {self.max_x}], "
                f"y [{self.min_y}, {self.max_y}]"
            )
            raise ValueError(msg)
        return self


class CollectionConfig(BaseSettings):
    """Configuration for shape collections.

    Can be overridden via environment variables with COLLECTION_ prefix:
    - COLLECTION_RENDER_MAX_CHARS

    Attributes:
        render_max_chars: Length after which the textual rendering of a
            collection stops listing members
    """

    model_config = SettingsConfigDict(
        env_prefix="COLLECTION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    render_max_chars: int = Field(
        default=150, ge=0, description="Rendering budget before members are elided"
    )


DEFAULT_CONTEXT_CONFIG = SpatialContextConfig()
DEFAULT_COLLECTION_CONFIG = CollectionConfig()
