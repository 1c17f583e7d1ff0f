"""Shared pytest fixtures for riskmap workflow tests.

Minimal fixtures: a fresh state machine and a map surface over the sample
New Delhi dataset. Nothing here triggers a Streamlit rerun.
"""

import pytest

from riskmap.model.geo_dataset import sample_dataset
from riskmap.ui.map_surface import MapSurface
from riskmap.ui.state_machine import SelectionStateMachine


@pytest.fixture
def sm() -> SelectionStateMachine:
    """Fresh selection state machine without Streamlit listener."""
    machine, _ = SelectionStateMachine.create(add_ui_listener=False)
    return machine


@pytest.fixture
def surface() -> MapSurface:
    """Map surface over the two-point sample dataset."""
    return MapSurface(dataset=sample_dataset())
