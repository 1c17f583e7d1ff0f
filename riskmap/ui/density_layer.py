"""DensityLayerBuilder - heatmap definition derived from a GeoDataset.

The density field is declared by four curves plus a constant opacity:

    weight(risk_score)  0 -> 0,   6 -> 1
    intensity(zoom)     0 -> 1,   9 -> 3
    radius(zoom)        0 -> 2px, 9 -> 20px
    color(density)      6-stop ramp, transparent blue -> white -> opaque red
    opacity             0.7

Weights depend only on the data, so they are computed once per dataset.
Intensity and radius depend on the camera, so they are evaluated at the
current zoom every time the scene is composed.

deck.gl's HeatmapLayer has no zoom expressions, which is why params_at(zoom)
exists: the zoom-dependent curves are resolved in Python and the resulting
scalars are handed to the layer.
"""

import logging
from dataclasses import dataclass, field

import numpy as np
import pydeck as pdk

from riskmap.constants import ClickConfig, DensityConfig
from riskmap.core.interpolation import ColorRamp, InterpolationCurve
from riskmap.model.geo_dataset import GeoDataset

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DensityPoint:
    """One weighted sample of the density field."""

    index: int  # Position in the GeoDataset
    lon: float
    lat: float
    weight: float


@dataclass(frozen=True)
class DensityLayerParams:
    """Heatmap parameters resolved at one zoom level."""

    zoom: float
    intensity: float
    radius_px: float
    opacity: float
    color_range: list[list[int]] = field(default_factory=list)


@dataclass(frozen=True)
class DensityField:
    """Declarative density-field definition.

    Attributes:
        points: Weighted samples in dataset order (empty for an empty dataset)
        weight: risk score -> weight curve
        intensity: zoom -> intensity curve
        radius: zoom -> radius (px) curve
        color: density -> RGBA ramp
        opacity: Constant layer opacity
    """

    points: tuple[DensityPoint, ...]
    weight: InterpolationCurve
    intensity: InterpolationCurve
    radius: InterpolationCurve
    color: ColorRamp
    opacity: float

    @property
    def is_empty(self) -> bool:
        return len(self.points) == 0

    def weight_for(self, index: int) -> float:
        """Weight of the observation at a dataset index."""
        for point in self.points:
            if point.index == index:
                return point.weight
        raise KeyError(f"No density point for observation index {index}")

    def params_at(self, zoom: float) -> DensityLayerParams:
        """Resolve the zoom-dependent curves at a zoom level."""
        return DensityLayerParams(
            zoom=zoom,
            intensity=self.intensity(zoom),
            radius_px=self.radius(zoom),
            opacity=self.opacity,
            color_range=self.color.sample(DensityConfig.COLOR_RANGE_SIZE),
        )

    def to_pydeck_layer(self, zoom: float) -> pdk.Layer:
        """Create the deck.gl HeatmapLayer for the given zoom.

        Weights are passed through unclamped (extrapolated scores give weights
        outside [0, 1]). deck.gl rejects negative radii, so the radius is
        floored at 0 for very low zooms.
        """
        params = self.params_at(zoom)
        data = [
            {
                "type": ClickConfig.TYPE_DENSITY,
                "index": p.index,
                "position": [p.lon, p.lat],
                "weight": p.weight,
            }
            for p in self.points
        ]
        return pdk.Layer(
            "HeatmapLayer",
            data,
            get_position="position",
            get_weight="weight",
            intensity=params.intensity,
            radius_pixels=max(params.radius_px, 0.0),
            color_range=params.color_range,
            opacity=params.opacity,
            pickable=False,
            id="risk_density",
        )


class DensityLayerBuilder:
    """Builds a DensityField from a GeoDataset.

    Example:
        builder = DensityLayerBuilder()
        density = builder.build(dataset)
        layer = density.to_pydeck_layer(zoom=11)
    """

    def __init__(
        self,
        weight: InterpolationCurve | None = None,
        intensity: InterpolationCurve | None = None,
        radius: InterpolationCurve | None = None,
        color: ColorRamp | None = None,
        opacity: float = DensityConfig.OPACITY,
    ) -> None:
        self.weight = weight or InterpolationCurve.from_stops(DensityConfig.WEIGHT_STOPS)
        self.intensity = intensity or InterpolationCurve.from_stops(DensityConfig.INTENSITY_STOPS)
        self.radius = radius or InterpolationCurve.from_stops(DensityConfig.RADIUS_STOPS)
        self.color = color or ColorRamp.from_stops(DensityConfig.COLOR_STOPS)
        self.opacity = opacity

    def build(self, dataset: GeoDataset) -> DensityField:
        """Derive the density field; an empty dataset gives an empty field."""
        scores = np.array([obs.risk_score for obs in dataset], dtype=float)
        weights = self.weight.evaluate_many(scores) if len(scores) else np.array([])
        points = tuple(
            DensityPoint(index=i, lon=obs.lon, lat=obs.lat, weight=float(w))
            for i, (obs, w) in enumerate(zip(dataset, weights))
        )
        logger.debug(f"[RENDER] Density field built with {len(points)} points")
        return DensityField(
            points=points,
            weight=self.weight,
            intensity=self.intensity,
            radius=self.radius,
            color=self.color,
            opacity=self.opacity,
        )
