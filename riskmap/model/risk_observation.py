"""RiskObservation - a single geolocated risk record.

A RiskObservation is the atom of the risk dataset: one coordinate, one
risk score and a free-text description. It is immutable so it can be
shared between the density field, the markers and the selection without
copies.

Used by:
- GeoDataset (ordered collection of observations)
- DensityLayerBuilder / MarkerLayer (derive visual layers)
- SelectionStateMachine (the selected observation drives the popup)
"""

import math
from dataclasses import dataclass

from riskmap.constants import LegendConfig


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_finite(value: float) -> bool:
    """math.isfinite that also rejects ints too large for a float."""
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


@dataclass(frozen=True)
class RiskObservation:
    """A point with a risk score and description.

    Attributes:
        lon: Longitude in decimal degrees (WGS84)
        lat: Latitude in decimal degrees (WGS84)
        risk_score: Risk score, conventionally in [0, 6]. Out-of-range values
            are accepted; the heatmap curves extrapolate.
        description: Free text shown in the popup

    Example:
        obs = RiskObservation(lon=77.2090, lat=28.6139, risk_score=5, description="High risk area")
    """

    lon: float
    lat: float
    risk_score: float
    description: str = ""

    def __post_init__(self) -> None:
        """Validate data after initialization - reject malformed input at the boundary."""
        if not _is_number(self.lon) or not _is_number(self.lat):
            raise ValueError(f"RiskObservation coordinate must be numeric, got ({self.lon!r}, {self.lat!r})")
        if not (_is_finite(self.lon) and _is_finite(self.lat)):
            raise ValueError(f"RiskObservation coordinate must be finite, got ({self.lon}, {self.lat})")
        if not -180.0 <= self.lon <= 180.0:
            raise ValueError(f"RiskObservation longitude {self.lon} outside [-180, 180]")
        if not -90.0 <= self.lat <= 90.0:
            raise ValueError(f"RiskObservation latitude {self.lat} outside [-90, 90]")
        if not _is_number(self.risk_score) or not _is_finite(self.risk_score):
            raise ValueError(f"RiskObservation risk_score must be a finite number, got {self.risk_score!r}")
        if not isinstance(self.description, str):
            raise ValueError(f"RiskObservation description must be text, got {type(self.description).__name__}")

    @property
    def coordinate(self) -> tuple[float, float]:
        """Return (lon, lat) tuple - GeoJSON/Pydeck order."""
        return (self.lon, self.lat)

    @property
    def risk_tier(self) -> str:
        """Legend tier (LegendConfig.HIGH / MEDIUM / LOW) for this score."""
        return LegendConfig.tier_for_score(self.risk_score)

    def __repr__(self) -> str:
        return f"RiskObservation(lon={self.lon:.5f}, lat={self.lat:.5f}, score={self.risk_score:g})"
