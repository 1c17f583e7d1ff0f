"""Click detection types - unified click information for map interactions.

This module defines the canonical types for ALL click detection:
- MapClickType: Source of click (MARKER or FEATURE)
- ClickInfo: Unified click information returned by ClickDetector

Marker clicks and generic map-feature clicks arrive with different payload
shapes (a marker record vs. a raw GeoJSON feature or its bare properties).
Both are reduced to a ClickInfo that points at exactly one observation,
either by dataset index or by value, so there is a single select path.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from riskmap.model.risk_observation import RiskObservation


class MapClickType(Enum):
    """Source of click on the map - EXACTLY one per interaction."""

    MARKER = "marker"  # Clicked a risk marker
    FEATURE = "feature"  # Generic map feature (density cell, GeoJSON feature)


@dataclass(frozen=True)
class ClickInfo:
    """Unified click information - the ONLY output from click detection.

    STRICT CONTRACT:
    - click_type is ALWAYS set
    - Exactly ONE of observation_index / observation is set

    Attributes:
        click_type: MARKER or FEATURE
        observation_index: 0-indexed position in the GeoDataset
        observation: Observation rebuilt from a payload without an index
    """

    click_type: MapClickType
    observation_index: Optional[int] = None
    observation: Optional[RiskObservation] = None

    def __post_init__(self) -> None:
        """Validate invariants - STRICT: fail immediately on invalid state."""
        has_index = self.observation_index is not None
        has_obs = self.observation is not None
        if has_index == has_obs:
            raise ValueError(
                f"ClickInfo needs exactly one of observation_index/observation, "
                f"got index={self.observation_index}, observation={self.observation}"
            )
        if has_index and self.observation_index < 0:
            raise ValueError(f"observation_index must be >= 0, got {self.observation_index}")

    @property
    def is_marker(self) -> bool:
        return self.click_type == MapClickType.MARKER

    @property
    def display_name(self) -> str:
        """Human-readable description for logs and toasts."""
        target = f"#{self.observation_index + 1}" if self.observation_index is not None else repr(self.observation)
        return f"{self.click_type.value} {target}"
