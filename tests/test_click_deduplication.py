"""Tests for deck click capture - event parsing and click deduplication.

st_deckgl keeps returning its last event on every rerun. render_pydeck_map
remembers the last click signature per component key so the same click is
processed only once; a new map key (map_version bump) starts fresh.
"""

from unittest.mock import patch

import pytest
import streamlit as st

from riskmap.ui.pydeck_click_handler import DeckClickResult, click_signature, parse_deckgl_event, render_pydeck_map

MARKER_EVENT = {
    "type": "risk_marker",
    "id": "R0",
    "index": 0,
    "position": [77.2090, 28.6139],
    "coordinate": [77.20901, 28.61392],
    "eventType": "click",
}
EMPTY_MAP_EVENT = {"coordinate": [77.3, 28.5], "eventType": "click"}


class TestParseDeckglEvent:
    """Raw st_deckgl events -> DeckClickResult."""

    def test_object_click(self) -> None:
        result = parse_deckgl_event(MARKER_EVENT)
        assert result.is_object_click
        assert result.picked == {"type": "risk_marker", "id": "R0", "index": 0, "position": [77.2090, 28.6139]}
        assert result.coordinate == [77.20901, 28.61392]
        assert result.hit_features == [result.picked]

    def test_empty_map_click(self) -> None:
        result = parse_deckgl_event(EMPTY_MAP_EVENT)
        assert not result.is_object_click
        assert not result.is_empty
        assert result.coordinate == [77.3, 28.5]
        assert result.hit_features == []

    @pytest.mark.parametrize("event", [None, {}, [], "click", {"eventType": "click"}])
    def test_no_click(self, event: object) -> None:
        result = parse_deckgl_event(event)
        assert result.is_empty
        assert result == DeckClickResult()

    def test_event_type_click_is_not_an_object(self) -> None:
        result = parse_deckgl_event({"type": "click", "coordinate": [1.0, 2.0]})
        assert not result.is_object_click


class TestClickSignature:
    """Stable identities for deduplication."""

    def test_object_id_and_coordinate(self) -> None:
        result = DeckClickResult(picked={"type": "risk_marker", "id": "R0"}, coordinate=[77.2, 28.6])
        assert click_signature(result) == "risk_marker_R0_coord_77.20000_28.60000"

    def test_falls_back_to_index(self) -> None:
        result = DeckClickResult(picked={"type": "density_point", "index": 3})
        assert click_signature(result) == "density_point_3"

    def test_falls_back_to_position(self) -> None:
        result = DeckClickResult(picked={"position": [1.0, 2.0]})
        assert click_signature(result) == "pos_1.000000_2.000000"

    def test_nothing(self) -> None:
        assert click_signature(DeckClickResult()) == ""


class TestRenderPydeckMap:
    """Same event twice is processed once."""

    @pytest.fixture
    def session(self) -> dict:
        state: dict = {}
        with patch.object(st, "session_state", state):
            yield state

    def test_repeated_event_deduplicated(self, session: dict) -> None:
        with patch("riskmap.ui.pydeck_click_handler.st_deckgl", return_value=MARKER_EVENT):
            first = render_pydeck_map(deck=None, key="risk_map_0")  # type: ignore[arg-type]
            second = render_pydeck_map(deck=None, key="risk_map_0")  # type: ignore[arg-type]
        assert first.is_object_click
        assert second.is_empty

    def test_new_map_key_accepts_same_click(self, session: dict) -> None:
        """After a map_version bump the same marker can be clicked again."""
        with patch("riskmap.ui.pydeck_click_handler.st_deckgl", return_value=MARKER_EVENT):
            render_pydeck_map(deck=None, key="risk_map_0")  # type: ignore[arg-type]
            again = render_pydeck_map(deck=None, key="risk_map_1")  # type: ignore[arg-type]
        assert again.is_object_click

    def test_different_click_accepted(self, session: dict) -> None:
        with patch("riskmap.ui.pydeck_click_handler.st_deckgl", side_effect=[MARKER_EVENT, EMPTY_MAP_EVENT]):
            render_pydeck_map(deck=None, key="risk_map_0")  # type: ignore[arg-type]
            second = render_pydeck_map(deck=None, key="risk_map_0")  # type: ignore[arg-type]
        assert second.coordinate == [77.3, 28.5]

    def test_no_event(self, session: dict) -> None:
        with patch("riskmap.ui.pydeck_click_handler.st_deckgl", return_value=None):
            result = render_pydeck_map(deck=None, key="risk_map_0")  # type: ignore[arg-type]
        assert result.is_empty
        assert session == {}
