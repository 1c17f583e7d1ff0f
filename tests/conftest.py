"""Shared pytest fixtures for riskmap tests.

Provides the sample New Delhi dataset and fresh controllers for each test.
All fixtures use explicit values with documented rationale.

COORDINATES:
    Tests use the two observations the app ships with:
    - (77.2090, 28.6139) score 5 "High risk area"  -> weight 5/6, HIGH tier
    - (77.2150, 28.6200) score 2 "Low risk area"   -> weight 1/3, LOW tier
"""

import pytest

from riskmap.model.geo_dataset import GeoDataset, sample_dataset
from riskmap.model.risk_observation import RiskObservation
from riskmap.ui.map_surface import MapSurface
from riskmap.ui.state_machine import SelectionStateMachine


@pytest.fixture
def high_risk() -> RiskObservation:
    """Score 5 observation (first in the sample dataset)."""
    return RiskObservation(lon=77.2090, lat=28.6139, risk_score=5, description="High risk area")


@pytest.fixture
def low_risk() -> RiskObservation:
    """Score 2 observation (second in the sample dataset)."""
    return RiskObservation(lon=77.2150, lat=28.6200, risk_score=2, description="Low risk area")


@pytest.fixture
def dataset() -> GeoDataset:
    """Two-point sample dataset."""
    return sample_dataset()


@pytest.fixture
def empty_dataset() -> GeoDataset:
    return GeoDataset()


@pytest.fixture
def sm() -> SelectionStateMachine:
    """Fresh selection state machine without Streamlit listener."""
    machine, _ = SelectionStateMachine.create(add_ui_listener=False)
    return machine


@pytest.fixture
def surface(dataset: GeoDataset) -> MapSurface:
    """Map surface over the sample dataset, no Streamlit reruns."""
    return MapSurface(dataset=dataset)


@pytest.fixture
def feature_collection() -> dict:
    """Sample dataset as a GeoJSON FeatureCollection."""
    return {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "properties": {"riskScore": 5, "description": "High risk area"},
                "geometry": {"type": "Point", "coordinates": [77.2090, 28.6139]},
            },
            {
                "type": "Feature",
                "properties": {"riskScore": 2, "description": "Low risk area"},
                "geometry": {"type": "Point", "coordinates": [77.2150, 28.6200]},
            },
        ],
    }
