"""Data model classes for the risk map.

- RiskObservation: Geometry + risk atom (lon, lat, risk score, description)
- GeoDataset: Immutable ordered collection of observations (GeoJSON in/out)
- ViewState: Camera center and zoom, replaced wholesale on gestures
- ClickInfo: Unified click information from click detection
"""

from riskmap.model.click_info import ClickInfo, MapClickType
from riskmap.model.geo_dataset import GeoDataset, sample_dataset
from riskmap.model.risk_observation import RiskObservation
from riskmap.model.view_state import ViewState

__all__ = [
    "RiskObservation",
    "GeoDataset",
    "sample_dataset",
    "ViewState",
    "ClickInfo",
    "MapClickType",
]
