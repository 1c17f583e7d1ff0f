"""Streamlit seams for the risk map.

Two side effects leave the pure map model and reach Streamlit:
- a selection change has to redraw the page (the popup moved or closed)
- a camera jump or a closed popup has to remount the deck.gl component,
  because st_deckgl only reads initial_view_state on mount and keeps
  replaying its last click otherwise

StreamlitUIListener and app.py call these functions by module attribute,
so tests patch 'riskmap.ui.infra.trigger_rerun' (or 'riskmap.app.trigger_rerun')
and drive the handlers without stopping the script.
"""

import logging

import streamlit as st

logger = logging.getLogger(__name__)


def trigger_rerun() -> None:
    """Redraw the whole page so the detail panel and popup layer follow the selection."""
    st.rerun()


def bump_map_version() -> int:
    """Give the deck a new component key.

    The map is rendered under key "risk_map_{map_version}". A fresh key
    mounts a new st_deckgl instance: it starts at the surface's current
    camera and has no last click to replay, so the marker whose popup was
    just closed can be picked again.

    Returns:
        The new map_version
    """
    old_version = st.session_state.get("map_version", 0)
    st.session_state.map_version = old_version + 1
    logger.info(f"[MAP] Deck remount: risk_map_{old_version} -> risk_map_{old_version + 1}")
    return old_version + 1
