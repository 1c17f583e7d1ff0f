"""Tests for model/ - RiskObservation, GeoDataset, ViewState, ClickInfo, messages."""

import dataclasses
import math

import pytest

from riskmap.constants import LegendConfig, MapConfig
from riskmap.model.click_info import ClickInfo, MapClickType
from riskmap.model.geo_dataset import GeoDataset
from riskmap.model.message import (
    InvalidContactNumberMessage,
    LoadingMessage,
    MessageLevel,
    ObservationDetailMessage,
    SelectionHintMessage,
)
from riskmap.model.risk_observation import RiskObservation
from riskmap.model.view_state import ViewState


class TestRiskObservation:
    """Validation and derived properties."""

    def test_valid_observation(self, high_risk: RiskObservation) -> None:
        assert high_risk.coordinate == (77.2090, 28.6139)
        assert high_risk.risk_tier == LegendConfig.HIGH

    def test_is_frozen(self, high_risk: RiskObservation) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            high_risk.risk_score = 1  # type: ignore[misc]

    @pytest.mark.parametrize(
        "lon,lat",
        [(181.0, 0.0), (-180.5, 0.0), (0.0, 90.1), (0.0, -91.0), (math.nan, 0.0), (0.0, math.inf)],
    )
    def test_rejects_bad_coordinates(self, lon: float, lat: float) -> None:
        with pytest.raises(ValueError):
            RiskObservation(lon=lon, lat=lat, risk_score=1)

    def test_rejects_non_numeric(self) -> None:
        with pytest.raises(ValueError, match="numeric"):
            RiskObservation(lon="77.2", lat=28.6, risk_score=1)  # type: ignore[arg-type]
        with pytest.raises(ValueError, match="numeric"):
            RiskObservation(lon=True, lat=28.6, risk_score=1)  # type: ignore[arg-type]

    def test_rejects_non_finite_score(self) -> None:
        with pytest.raises(ValueError, match="risk_score"):
            RiskObservation(lon=0.0, lat=0.0, risk_score=math.nan)

    @pytest.mark.parametrize("field", ["lon", "lat", "risk_score"])
    def test_rejects_int_too_large_for_float(self, field: str) -> None:
        values = {"lon": 0.0, "lat": 0.0, "risk_score": 1}
        values[field] = 10**400
        with pytest.raises(ValueError, match="finite"):
            RiskObservation(**values)

    def test_rejects_non_text_description(self) -> None:
        with pytest.raises(ValueError, match="description"):
            RiskObservation(lon=0.0, lat=0.0, risk_score=1, description=None)  # type: ignore[arg-type]

    def test_out_of_range_score_accepted(self) -> None:
        """Scores outside [0, 6] are data, not errors; curves extrapolate."""
        obs = RiskObservation(lon=0.0, lat=0.0, risk_score=9)
        assert obs.risk_tier == LegendConfig.HIGH

    @pytest.mark.parametrize(
        "score,tier",
        [(6, LegendConfig.HIGH), (4, LegendConfig.HIGH), (3.9, LegendConfig.MEDIUM), (3, LegendConfig.MEDIUM),
         (2.9, LegendConfig.LOW), (2, LegendConfig.LOW), (1.5, LegendConfig.LOW), (-1, LegendConfig.LOW)],
    )
    def test_risk_tiers(self, score: float, tier: str) -> None:
        assert RiskObservation(lon=0.0, lat=0.0, risk_score=score).risk_tier == tier


class TestGeoDataset:
    """Ordered collection and GeoJSON exchange."""

    def test_sequence_protocol(self, dataset: GeoDataset, high_risk: RiskObservation) -> None:
        assert len(dataset) == 2
        assert dataset[0] == high_risk
        assert [obs.risk_score for obs in dataset] == [5, 2]
        assert not dataset.is_empty

    def test_empty(self, empty_dataset: GeoDataset) -> None:
        assert empty_dataset.is_empty
        assert empty_dataset.bounds() is None
        assert empty_dataset.centroid() is None

    def test_index_of(self, dataset: GeoDataset, low_risk: RiskObservation) -> None:
        assert dataset.index_of(low_risk) == 1
        assert dataset.index_of(RiskObservation(lon=0.0, lat=0.0, risk_score=1)) is None

    def test_rejects_foreign_items(self) -> None:
        with pytest.raises(ValueError, match="item 0"):
            GeoDataset(observations=({"lon": 0},))  # type: ignore[arg-type]

    def test_bounds_and_centroid(self, dataset: GeoDataset) -> None:
        assert dataset.bounds() == (77.2090, 28.6139, 77.2150, 28.6200)
        lon, lat = dataset.centroid()
        assert lon == pytest.approx(77.2120)
        assert lat == pytest.approx(28.61695)

    def test_from_geojson(self, feature_collection: dict, dataset: GeoDataset) -> None:
        assert GeoDataset.from_geojson(feature_collection) == dataset

    def test_to_geojson_shape(self, dataset: GeoDataset) -> None:
        fc = dataset.to_geojson()
        assert fc["type"] == "FeatureCollection"
        first = fc["features"][0]
        assert first["geometry"] == {"type": "Point", "coordinates": [77.2090, 28.6139]}
        assert first["properties"] == {"riskScore": 5, "description": "High risk area"}

    def test_missing_description_defaults_empty(self) -> None:
        fc = {
            "type": "FeatureCollection",
            "features": [{"type": "Feature", "properties": {"riskScore": 3}, "geometry": {"type": "Point", "coordinates": [1, 2]}}],
        }
        assert GeoDataset.from_geojson(fc)[0].description == ""

    def test_rejects_non_collection(self) -> None:
        with pytest.raises(ValueError, match="FeatureCollection"):
            GeoDataset.from_geojson({"type": "Feature"})
        with pytest.raises(ValueError, match="FeatureCollection"):
            GeoDataset.from_geojson([1, 2])  # type: ignore[arg-type]

    def test_rejects_missing_features_list(self) -> None:
        with pytest.raises(ValueError, match="features"):
            GeoDataset.from_geojson({"type": "FeatureCollection"})

    def test_error_names_feature_index(self, feature_collection: dict) -> None:
        feature_collection["features"][1]["properties"] = {"description": "no score"}
        with pytest.raises(ValueError, match="Feature 1"):
            GeoDataset.from_geojson(feature_collection)

    def test_huge_score_is_a_value_error(self, feature_collection: dict) -> None:
        """A JSON integer beyond float range is reported like any other bad feature."""
        feature_collection["features"][0]["properties"]["riskScore"] = 10**400
        with pytest.raises(ValueError, match="Feature 0: .*risk_score"):
            GeoDataset.from_geojson(feature_collection)

    def test_rejects_non_point_geometry(self, feature_collection: dict) -> None:
        feature_collection["features"][0]["geometry"] = {"type": "LineString", "coordinates": [[0, 0], [1, 1]]}
        with pytest.raises(ValueError, match="Feature 0 must have Point geometry"):
            GeoDataset.from_geojson(feature_collection)

    def test_wraps_observation_errors(self, feature_collection: dict) -> None:
        feature_collection["features"][0]["geometry"]["coordinates"] = [200.0, 28.6]
        with pytest.raises(ValueError, match="Feature 0: .*longitude"):
            GeoDataset.from_geojson(feature_collection)


class TestViewState:
    """Camera value object."""

    def test_defaults_to_new_delhi(self) -> None:
        view = ViewState()
        assert view.center == (MapConfig.START_CENTER_LON, MapConfig.START_CENTER_LAT)
        assert view.zoom == 11

    def test_with_zoom_returns_new_instance(self) -> None:
        view = ViewState()
        zoomed = view.with_zoom(14)
        assert zoomed.zoom == 14
        assert view.zoom == 11
        assert zoomed.center == view.center

    def test_with_center(self) -> None:
        moved = ViewState().with_center(lon=10.0, lat=20.0)
        assert moved.center == (10.0, 20.0)

    def test_is_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            ViewState().zoom = 3  # type: ignore[misc]

    def test_rejects_non_finite(self) -> None:
        with pytest.raises(ValueError, match="zoom"):
            ViewState(zoom=math.nan)
        with pytest.raises(ValueError, match="lon"):
            ViewState(lon=10**400)

    def test_to_pydeck(self) -> None:
        deck_view = ViewState(lon=1.0, lat=2.0, zoom=3.0).to_pydeck()
        assert deck_view.longitude == 1.0
        assert deck_view.latitude == 2.0
        assert deck_view.zoom == 3.0


class TestClickInfo:
    """Exactly one of index/observation."""

    def test_by_index(self) -> None:
        info = ClickInfo(click_type=MapClickType.MARKER, observation_index=0)
        assert info.is_marker
        assert info.display_name == "marker #1"

    def test_by_observation(self, high_risk: RiskObservation) -> None:
        info = ClickInfo(click_type=MapClickType.FEATURE, observation=high_risk)
        assert not info.is_marker
        assert info.display_name.startswith("feature RiskObservation(")

    def test_needs_exactly_one_target(self, high_risk: RiskObservation) -> None:
        with pytest.raises(ValueError):
            ClickInfo(click_type=MapClickType.MARKER)
        with pytest.raises(ValueError):
            ClickInfo(click_type=MapClickType.MARKER, observation_index=0, observation=high_risk)

    def test_rejects_negative_index(self) -> None:
        with pytest.raises(ValueError, match=">= 0"):
            ClickInfo(click_type=MapClickType.MARKER, observation_index=-1)


class TestMessages:
    """Panel and toast message text and levels."""

    def test_detail_message_levels_follow_tier(self, high_risk: RiskObservation, low_risk: RiskObservation) -> None:
        assert ObservationDetailMessage(observation=high_risk).level == MessageLevel.ERROR
        assert ObservationDetailMessage(observation=low_risk).level == MessageLevel.INFO
        medium = RiskObservation(lon=0.0, lat=0.0, risk_score=3)
        assert ObservationDetailMessage(observation=medium).level == MessageLevel.WARNING

    def test_detail_message_text(self, high_risk: RiskObservation) -> None:
        text = ObservationDetailMessage(observation=high_risk).message
        assert "High risk area" in text
        assert "Risk Score: 5 (High Risk)" in text
        assert "28.6139, 77.2090" in text

    def test_selection_hint(self) -> None:
        assert SelectionHintMessage(observation_count=0).message == "No risk observations to display."
        assert "2 markers" in SelectionHintMessage(observation_count=2).message

    def test_loading_message(self) -> None:
        assert LoadingMessage().level == MessageLevel.INFO
        assert "Loading" in LoadingMessage().message

    def test_invalid_contact_toast(self) -> None:
        toast = InvalidContactNumberMessage(label="Police", number="abc")
        assert toast.icon == "📵"
        assert "Police" in toast.message and "abc" in toast.message
