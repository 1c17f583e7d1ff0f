"""GeoDataset - immutable, ordered collection of risk observations.

The dataset is supplied by whoever owns the risk data and is never mutated
by the map. Order only determines marker draw order (later = on top).

Risk feeds are published as GeoJSON, so the dataset can be built from
and exported to a FeatureCollection of Point features:

    {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "properties": {"riskScore": 5, "description": "High risk area"},
                "geometry": {"type": "Point", "coordinates": [77.2090, 28.6139]},
            },
        ],
    }
"""

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from riskmap.model.risk_observation import RiskObservation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeoDataset:
    """Ordered, immutable sequence of RiskObservation.

    Attributes:
        observations: Tuple of observations in draw order
    """

    observations: tuple[RiskObservation, ...] = ()

    def __post_init__(self) -> None:
        for i, obs in enumerate(self.observations):
            if not isinstance(obs, RiskObservation):
                raise ValueError(f"GeoDataset item {i} is not a RiskObservation: {obs!r}")

    @staticmethod
    def of(observations: Iterable[RiskObservation]) -> "GeoDataset":
        """Build a dataset from any iterable of observations."""
        return GeoDataset(observations=tuple(observations))

    # =========================================================================
    # SEQUENCE PROTOCOL
    # =========================================================================

    def __len__(self) -> int:
        return len(self.observations)

    def __iter__(self) -> Iterator[RiskObservation]:
        return iter(self.observations)

    def __getitem__(self, index: int) -> RiskObservation:
        return self.observations[index]

    @property
    def is_empty(self) -> bool:
        return len(self.observations) == 0

    def index_of(self, observation: RiskObservation) -> int | None:
        """Position of an observation in the dataset, or None if absent."""
        for i, obs in enumerate(self.observations):
            if obs == observation:
                return i
        return None

    # =========================================================================
    # GEOMETRY
    # =========================================================================

    def bounds(self) -> tuple[float, float, float, float] | None:
        """Return (min_lon, min_lat, max_lon, max_lat), or None when empty."""
        if self.is_empty:
            return None
        lons = [obs.lon for obs in self.observations]
        lats = [obs.lat for obs in self.observations]
        return (min(lons), min(lats), max(lons), max(lats))

    def centroid(self) -> tuple[float, float] | None:
        """Return mean (lon, lat), or None when empty."""
        if self.is_empty:
            return None
        n = len(self.observations)
        return (
            sum(obs.lon for obs in self.observations) / n,
            sum(obs.lat for obs in self.observations) / n,
        )

    # =========================================================================
    # GEOJSON
    # =========================================================================

    @staticmethod
    def from_geojson(feature_collection: Mapping[str, Any]) -> "GeoDataset":
        """Parse a GeoJSON FeatureCollection of Point features.

        Raises:
            ValueError: If the collection or any feature is malformed. The
                message names the offending feature index.
        """
        if not isinstance(feature_collection, Mapping):
            raise ValueError(f"Expected a FeatureCollection object, got {type(feature_collection).__name__}")
        if feature_collection.get("type") != "FeatureCollection":
            raise ValueError(f"Expected a FeatureCollection, got type={feature_collection.get('type')!r}")
        features = feature_collection.get("features")
        if not isinstance(features, list):
            raise ValueError("FeatureCollection.features must be a list")

        observations = [GeoDataset._parse_feature(feature=f, index=i) for i, f in enumerate(features)]
        logger.info(f"Loaded {len(observations)} risk observations from GeoJSON")
        return GeoDataset(observations=tuple(observations))

    @staticmethod
    def _parse_feature(feature: Any, index: int) -> RiskObservation:
        if not isinstance(feature, Mapping):
            raise ValueError(f"Feature {index} is not an object")
        geometry = feature.get("geometry")
        if not isinstance(geometry, Mapping) or geometry.get("type") != "Point":
            raise ValueError(f"Feature {index} must have Point geometry")
        coords = geometry.get("coordinates")
        if not isinstance(coords, (list, tuple)) or len(coords) < 2:
            raise ValueError(f"Feature {index} must have [lon, lat] coordinates, got {coords!r}")
        props = feature.get("properties") or {}
        if not isinstance(props, Mapping) or "riskScore" not in props:
            raise ValueError(f"Feature {index} is missing properties.riskScore")
        try:
            return RiskObservation(
                lon=coords[0],
                lat=coords[1],
                risk_score=props["riskScore"],
                description=props.get("description", ""),
            )
        except ValueError as e:
            raise ValueError(f"Feature {index}: {e}") from e

    def to_geojson(self) -> dict[str, Any]:
        """Export as a GeoJSON FeatureCollection (inverse of from_geojson)."""
        return {
            "type": "FeatureCollection",
            "features": [
                {
                    "type": "Feature",
                    "properties": {"riskScore": obs.risk_score, "description": obs.description},
                    "geometry": {"type": "Point", "coordinates": [obs.lon, obs.lat]},
                }
                for obs in self.observations
            ],
        }


def sample_dataset() -> GeoDataset:
    """The two New Delhi observations the map ships with."""
    return GeoDataset.of(
        [
            RiskObservation(lon=77.2090, lat=28.6139, risk_score=5, description="High risk area"),
            RiskObservation(lon=77.2150, lat=28.6200, risk_score=2, description="Low risk area"),
        ]
    )
