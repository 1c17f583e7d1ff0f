"""Core foundation classes for the risk map.

Classes:
    InterpolationCurve: Piecewise-linear curve with linear extrapolation
    ColorRamp: Piecewise-linear RGBA ramp over a normalized domain
"""

from riskmap.core.interpolation import ColorRamp, InterpolationCurve

__all__ = [
    "ColorRamp",
    "InterpolationCurve",
]
