"""Click detector - turns picked map payloads into ClickInfo.

deck.gl click events return the picked record directly. Risk markers and
density samples carry a "type" tag and their dataset index. Generic map
features may also arrive as raw GeoJSON (type "Feature" with "properties"
and "geometry") or as bare properties with a "coordinates" field. All of
these shapes are reduced to one ClickInfo so selection has a single entry
point.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from riskmap.constants import ClickConfig
from riskmap.model.click_info import ClickInfo, MapClickType
from riskmap.model.risk_observation import RiskObservation

logger = logging.getLogger(__name__)


def _as_index(value: Any) -> int | None:
    """Accept ints (and integral floats from JSON) as dataset indices."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    if isinstance(value, float) and value.is_integer() and value >= 0:
        return int(value)
    return None


class ClickDetector:
    """Parses picked objects into ClickInfo. Stateless."""

    def parse(self, obj: Mapping[str, Any] | None) -> ClickInfo | None:
        """Parse one picked payload.

        Returns:
            ClickInfo, or None for payloads that don't point at an observation
        """
        if not obj:
            return None

        obj_type = obj.get("type")

        # GeoJSON Feature: merge properties into obj for easier access
        if obj_type == ClickConfig.TYPE_FEATURE:
            props = obj.get("properties")
            geometry = obj.get("geometry")
            merged = {**props} if isinstance(props, Mapping) else {}
            if "coordinates" not in merged and isinstance(geometry, Mapping) and "coordinates" in geometry:
                merged["coordinates"] = geometry["coordinates"]
            return self._parse_properties(props=merged, click_type=MapClickType.FEATURE)

        if obj_type == ClickConfig.TYPE_MARKER:
            index = _as_index(obj.get("index"))
            if index is None:
                logger.warning(f"[CLICK] Marker click missing index: {obj}")
                return None
            return ClickInfo(click_type=MapClickType.MARKER, observation_index=index)

        if obj_type == ClickConfig.TYPE_DENSITY:
            index = _as_index(obj.get("index"))
            if index is None:
                logger.warning(f"[CLICK] Density click missing index: {obj}")
                return None
            return ClickInfo(click_type=MapClickType.FEATURE, observation_index=index)

        if obj_type == ClickConfig.TYPE_POPUP:
            logger.debug("[CLICK] Popup click ignored")
            return None

        # Bare properties (no type tag)
        if obj_type is None:
            return self._parse_properties(props=obj, click_type=MapClickType.FEATURE)

        logger.warning(f"[CLICK] Unknown object type: {obj_type}")
        return None

    def parse_hits(self, hit_features: Sequence[Mapping[str, Any]]) -> list[ClickInfo]:
        """Parse hit features in draw order, dropping those without an observation."""
        infos = []
        for feature in hit_features:
            info = self.parse(feature)
            if info is not None:
                infos.append(info)
        return infos

    def _parse_properties(self, props: Mapping[str, Any], click_type: MapClickType) -> ClickInfo | None:
        index = _as_index(props.get("index"))
        if index is not None:
            return ClickInfo(click_type=click_type, observation_index=index)

        coords = props.get("coordinates")
        score = props.get("riskScore", props.get("risk_score"))
        if not isinstance(coords, (list, tuple)) or len(coords) < 2 or score is None:
            logger.debug(f"[CLICK] Feature without index or coordinates/riskScore: {props}")
            return None
        try:
            observation = RiskObservation(
                lon=coords[0],
                lat=coords[1],
                risk_score=score,
                description=props.get("description", ""),
            )
        except ValueError as e:
            logger.warning(f"[CLICK] Malformed feature payload ignored: {e}")
            return None
        return ClickInfo(click_type=click_type, observation=observation)
