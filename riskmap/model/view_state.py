"""ViewState - camera parameters for the map (center + zoom).

Replaced wholesale on every pan/zoom gesture, never mutated in place, so a
renderer can never observe a half-updated camera.
"""

import math
from dataclasses import dataclass, replace

import pydeck as pdk

from riskmap.constants import MapConfig


@dataclass(frozen=True)
class ViewState:
    """Camera center and zoom.

    Attributes:
        lon: Center longitude in decimal degrees (WGS84)
        lat: Center latitude in decimal degrees (WGS84)
        zoom: Zoom level. Unbounded here; deck.gl clamps to its own range.
    """

    lon: float = MapConfig.START_CENTER_LON
    lat: float = MapConfig.START_CENTER_LAT
    zoom: float = MapConfig.DEFAULT_ZOOM

    def __post_init__(self) -> None:
        for name in ("lon", "lat", "zoom"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"ViewState.{name} must be a finite number, got {value!r}")
            try:
                finite = math.isfinite(value)
            except OverflowError:
                finite = False
            if not finite:
                raise ValueError(f"ViewState.{name} must be a finite number, got {value!r}")

    @property
    def center(self) -> tuple[float, float]:
        """Return (lon, lat) tuple."""
        return (self.lon, self.lat)

    def with_zoom(self, zoom: float) -> "ViewState":
        return replace(self, zoom=zoom)

    def with_center(self, lon: float, lat: float) -> "ViewState":
        return replace(self, lon=lon, lat=lat)

    def to_pydeck(self) -> pdk.ViewState:
        """Create Pydeck ViewState (flat 2D camera)."""
        return pdk.ViewState(
            latitude=self.lat,
            longitude=self.lon,
            zoom=self.zoom,
            pitch=MapConfig.DEFAULT_PITCH,
            bearing=MapConfig.DEFAULT_BEARING,
        )

    def __repr__(self) -> str:
        return f"ViewState(lon={self.lon:.5f}, lat={self.lat:.5f}, zoom={self.zoom:g})"
