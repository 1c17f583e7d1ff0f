"""MarkerLayer - one clickable marker per risk observation.

Markers and the density field come from the same dataset but are separate
visual layers. Only markers are pickable; clicking the heatmap never counts
as clicking a marker.

Marker records are tagged with ClickConfig.TYPE_MARKER and their dataset
index so ClickDetector can map a deck.gl pick back to the observation.
"""

import logging
from dataclasses import dataclass

import pydeck as pdk

from riskmap.constants import ClickConfig, LegendConfig, MarkerConfig
from riskmap.core.interpolation import InterpolationCurve
from riskmap.model.geo_dataset import GeoDataset
from riskmap.model.risk_observation import RiskObservation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Marker:
    """A clickable marker anchored at an observation's coordinate."""

    index: int
    observation: RiskObservation

    @property
    def marker_id(self) -> str:
        return f"{ClickConfig.MARKER_ID_PREFIX}{self.index}"

    @property
    def position(self) -> list[float]:
        return [self.observation.lon, self.observation.lat]

    @property
    def color(self) -> list[int]:
        return LegendConfig.hex_to_rgba(LegendConfig.TIER_COLORS[self.observation.risk_tier])

    @property
    def name(self) -> str:
        """Tooltip text."""
        label = self.observation.description or f"Observation {self.index + 1}"
        return f"{label} (risk {self.observation.risk_score:g})"

    def to_record(self) -> dict:
        """deck.gl data record (spread into click events by st_deckgl)."""
        return {
            "type": ClickConfig.TYPE_MARKER,
            "id": self.marker_id,
            "index": self.index,
            "position": self.position,
            "risk_score": self.observation.risk_score,
            "description": self.observation.description,
            "color": self.color,
            "name": self.name,
        }


class MarkerLayer:
    """Derives markers from a GeoDataset, in dataset (draw) order.

    Example:
        layer = MarkerLayer(dataset)
        deck_layer = layer.to_pydeck_layer(zoom=11)
    """

    def __init__(self, dataset: GeoDataset, radius: InterpolationCurve | None = None) -> None:
        self.markers: tuple[Marker, ...] = tuple(
            Marker(index=i, observation=obs) for i, obs in enumerate(dataset)
        )
        self.radius = radius or InterpolationCurve.from_stops(MarkerConfig.RADIUS_STOPS)

    def __len__(self) -> int:
        return len(self.markers)

    def radius_at(self, zoom: float) -> float:
        """Marker radius in pixels; positions never change with zoom, only size."""
        return max(self.radius(zoom), MarkerConfig.MIN_RADIUS_PX)

    def to_pydeck_layer(self, zoom: float) -> pdk.Layer:
        """Create pickable ScatterplotLayer for the markers."""
        return pdk.Layer(
            "ScatterplotLayer",
            [m.to_record() for m in self.markers],
            get_position="position",
            get_fill_color="color",
            get_line_color=MarkerConfig.BORDER_COLOR,
            get_radius=self.radius_at(zoom),
            radius_units="pixels",
            stroked=True,
            line_width_min_pixels=2,
            pickable=True,
            auto_highlight=True,
            highlight_color=MarkerConfig.HIGHLIGHT_COLOR,
            id="risk_markers",
        )
