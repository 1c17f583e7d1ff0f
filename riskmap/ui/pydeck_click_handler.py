"""Deck rendering with click capture through streamlit-deckgl.

st.pydeck_chart only reports object selections. st_deckgl hands back the
whole onClick event instead, so a click on empty map space still arrives
(coordinate only) and the map surface can treat it as "nothing hit".

The component repeats its last event on every rerun; clicks are therefore
compared against the last signature seen for the same component key.
"""

import logging
from dataclasses import dataclass
from typing import Any

import pydeck as pdk
import streamlit as st
from streamlit_deckgl import st_deckgl  # type: ignore[import-untyped]

from riskmap.constants import MapConfig

logger = logging.getLogger(__name__)

# Keys st_deckgl adds to the picked record
_EVENT_KEYS = ("coordinate", "eventType")


@dataclass
class DeckClickResult:
    """One click on the deck.

    Attributes:
        picked: Record of the topmost picked object, None for empty map space
        coordinate: [lon, lat] under the cursor
    """

    picked: dict[str, Any] | None = None
    coordinate: list[float] | None = None

    @property
    def is_empty(self) -> bool:
        return self.picked is None and self.coordinate is None

    @property
    def is_object_click(self) -> bool:
        return self.picked is not None

    @property
    def hit_features(self) -> list[dict[str, Any]]:
        """Picked records back to front. deck.gl only reports the topmost one."""
        return [] if self.picked is None else [self.picked]


def parse_deckgl_event(event: Any) -> DeckClickResult:
    """Split a raw st_deckgl event into picked record and coordinate.

    The picked record's fields are spread into the event itself:
        empty map:  {coordinate: [lon, lat], eventType: "click"}
        marker:     {type: "risk_marker", id: "R0", index: 0, ..., coordinate: [...], eventType: "click"}
    """
    if not isinstance(event, dict) or not event:
        return DeckClickResult()

    result = DeckClickResult()
    coord = event.get("coordinate")
    if isinstance(coord, (list, tuple)) and len(coord) >= 2:
        result.coordinate = [float(coord[0]), float(coord[1])]

    # Every record our layers emit carries a type tag
    tag = event.get("type")
    if tag and tag != "click":
        result.picked = {k: v for k, v in event.items() if k not in _EVENT_KEYS}
        logger.debug(f"[CLICK] Picked {tag} {event.get('id', event.get('index'))}")
    return result


def click_signature(result: DeckClickResult) -> str:
    """Identity of a click for deduplication.

    Picked records are identified by type tag plus id (or dataset index),
    falling back to their position. The cursor coordinate is appended,
    rounded to roughly one metre.
    """
    parts: list[str] = []
    picked = result.picked
    if picked:
        tag = picked.get("type", "")
        ident = picked.get("id", picked.get("index", ""))
        position = picked.get("position") or []
        if tag and ident != "":
            parts.append(f"{tag}_{ident}")
        elif len(position) >= 2:
            parts.append(f"pos_{position[0]:.6f}_{position[1]:.6f}")
    if result.coordinate:
        lon, lat = result.coordinate
        parts.append(f"coord_{lon:.5f}_{lat:.5f}")
    return "_".join(parts)


def render_pydeck_map(
    deck: pdk.Deck,
    key: str,
    height: int = MapConfig.MAP_HEIGHT_PX,
) -> DeckClickResult:
    """Draw the deck and return the latest click not yet handled for this key.

    Args:
        deck: Deck from MapSurface.render_deck()
        key: Component key; a new key (map_version bump) forgets old clicks
        height: Height in pixels

    Returns:
        DeckClickResult, empty when there is no new click
    """
    seen_key = f"_deckgl_last_click_{key}"

    # events=["click"] is required, the component reports nothing otherwise
    result = parse_deckgl_event(st_deckgl(deck, key=key, height=height, events=["click"]))
    if result.is_empty:
        return result

    signature = click_signature(result)
    if st.session_state.get(seen_key) == signature:
        return DeckClickResult()
    st.session_state[seen_key] = signature

    logger.info(f"[CLICK] New deck click: object={result.is_object_click}, coord={result.coordinate}")
    return result
