"""Piecewise-linear curves over explicit control points.

The heatmap style is declared as a handful of "interpolate linear" curves
(weight by risk score, intensity and radius by zoom, color by density).
Each curve is a pure function of its control points so it can be tested
without a renderer.

Out-of-range policy:
    InterpolationCurve extrapolates linearly using the first/last segment.
    ColorRamp clamps its input to the stop domain, because density is a
    normalized quantity and there is no color "beyond" the last stop.
"""

from bisect import bisect_right
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

ControlPoint = tuple[float, float]
RGBA = tuple[int, int, int, int]


def _check_stop_inputs(inputs: Sequence[float], name: str) -> None:
    if len(inputs) < 2:
        raise ValueError(f"{name} needs at least 2 control points, got {len(inputs)}")
    if any(b <= a for a, b in zip(inputs, inputs[1:])):
        raise ValueError(f"{name} control point inputs must be strictly increasing: {list(inputs)}")


@dataclass(frozen=True)
class InterpolationCurve:
    """Linear interpolation through control points with linear extrapolation.

    Attributes:
        stops: (input, output) pairs with strictly increasing inputs

    Example:
        weight = InterpolationCurve.from_stops([(0, 0), (6, 1)])
        weight(3.0)  # 0.5
        weight(9.0)  # 1.5 (extrapolated)
    """

    stops: tuple[ControlPoint, ...]

    def __post_init__(self) -> None:
        _check_stop_inputs([x for x, _ in self.stops], name="InterpolationCurve")

    @staticmethod
    def from_stops(stops: Sequence[Sequence[float]]) -> "InterpolationCurve":
        return InterpolationCurve(stops=tuple((float(x), float(y)) for x, y in stops))

    @property
    def domain(self) -> tuple[float, float]:
        """Input range covered by control points (outside it we extrapolate)."""
        return (self.stops[0][0], self.stops[-1][0])

    def _segment_for(self, x: float) -> tuple[ControlPoint, ControlPoint]:
        inputs = [sx for sx, _ in self.stops]
        # Clamp the segment index so out-of-range inputs reuse the edge segment
        idx = min(max(bisect_right(inputs, x), 1), len(self.stops) - 1)
        return self.stops[idx - 1], self.stops[idx]

    def __call__(self, x: float) -> float:
        (x0, y0), (x1, y1) = self._segment_for(float(x))
        return y0 + (float(x) - x0) * (y1 - y0) / (x1 - x0)

    def evaluate_many(self, xs: Sequence[float] | np.ndarray) -> np.ndarray:
        """Vectorized evaluation, same semantics as calling the curve per value."""
        values = np.asarray(xs, dtype=float)
        inputs = np.array([sx for sx, _ in self.stops])
        outputs = np.array([sy for _, sy in self.stops])
        idx = np.clip(np.searchsorted(inputs, values, side="right"), 1, len(inputs) - 1)
        x0, x1 = inputs[idx - 1], inputs[idx]
        y0, y1 = outputs[idx - 1], outputs[idx]
        return y0 + (values - x0) * (y1 - y0) / (x1 - x0)


@dataclass(frozen=True)
class ColorRamp:
    """Piecewise-linear RGBA ramp over a normalized input (heatmap density).

    Attributes:
        stops: (position, (r, g, b, a)) pairs, positions strictly increasing.
               Channels are 0-255 integers.
    """

    stops: tuple[tuple[float, RGBA], ...]

    def __post_init__(self) -> None:
        _check_stop_inputs([p for p, _ in self.stops], name="ColorRamp")
        for position, color in self.stops:
            if len(color) != 4 or any(not 0 <= c <= 255 for c in color):
                raise ValueError(f"ColorRamp stop at {position} must be RGBA in 0-255, got {color}")

    @staticmethod
    def from_stops(stops: Sequence[tuple[float, Sequence[int]]]) -> "ColorRamp":
        return ColorRamp(stops=tuple((float(p), tuple(int(c) for c in color)) for p, color in stops))

    def __call__(self, density: float) -> RGBA:
        lo, hi = self.stops[0][0], self.stops[-1][0]
        d = min(max(float(density), lo), hi)
        positions = [p for p, _ in self.stops]
        idx = min(max(bisect_right(positions, d), 1), len(self.stops) - 1)
        (p0, c0), (p1, c1) = self.stops[idx - 1], self.stops[idx]
        t = (d - p0) / (p1 - p0)
        return tuple(int(round(a + (b - a) * t)) for a, b in zip(c0, c1))  # type: ignore[return-value]

    def sample(self, n: int) -> list[list[int]]:
        """Sample n evenly spaced colors across the ramp (deck.gl colorRange)."""
        if n < 2:
            raise ValueError(f"Need at least 2 samples, got {n}")
        lo, hi = self.stops[0][0], self.stops[-1][0]
        return [list(self(lo + (hi - lo) * i / (n - 1))) for i in range(n)]

    @staticmethod
    def perceived_intensity(color: RGBA) -> float:
        """Heat score of a color: opacity plus redness (0 = cold/clear, 1 = hot/opaque).

        Used to check that the ramp gets monotonically "hotter" with density.
        """
        r, g, b, a = color
        redness = (r - (g + b) / 2 + 255) / 510  # 0 for pure cyan, 1 for pure red
        return (a / 255) * 0.5 + redness * 0.5
