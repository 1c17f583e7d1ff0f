"""MapSurface - owns camera and selection, composes the rendered scene.

MapSurface is the only writer of the two pieces of mutable map state:
- ViewState: replaced wholesale by on_gesture()
- Selection: driven through SelectionStateMachine by click handlers

Every change bumps scene_version; compose()/render_deck() always build the
scene from the current values, so there is nothing to invalidate.

Hit-testing convention for on_map_click():
    hit_features is given in draw order (back to front). The topmost hit,
    i.e. the LAST feature in the list that resolves to an observation, wins.
    Layers are drawn density -> markers -> popup, so a marker beats the
    density sample underneath it.

Example:
    surface = MapSurface(dataset=sample_dataset())
    surface.on_marker_index_click(0)
    deck = surface.render_deck()
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

import pydeck as pdk
from statemachine import State

from riskmap.constants import ClickConfig, MapConfig, MarkerConfig
from riskmap.model.click_info import ClickInfo
from riskmap.model.geo_dataset import GeoDataset
from riskmap.model.risk_observation import RiskObservation
from riskmap.model.view_state import ViewState
from riskmap.ui.click_detector import ClickDetector
from riskmap.ui.density_layer import DensityField, DensityLayerBuilder, DensityLayerParams
from riskmap.ui.marker_layer import Marker, MarkerLayer
from riskmap.ui.overlays import LoadingGate
from riskmap.ui.state_machine import SelectionStateMachine, changes_selection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Popup:
    """Detail popup for the selected observation."""

    observation: RiskObservation
    index: int | None

    @property
    def lon(self) -> float:
        return self.observation.lon

    @property
    def lat(self) -> float:
        return self.observation.lat

    @property
    def title(self) -> str:
        return self.observation.description or "Risk observation"

    @property
    def body(self) -> str:
        return f"Risk Score: {self.observation.risk_score:g}"


@dataclass(frozen=True)
class Scene:
    """Everything needed to draw one frame of the map."""

    view_state: ViewState
    density: DensityLayerParams
    density_field: DensityField
    markers: tuple[Marker, ...]
    popup: Popup | None
    version: int


@dataclass
class LayerCollection:
    """Manages Pydeck layers with correct z-ordering.

    Z-order (back to front): density -> markers -> popup

    Markers sit above the heatmap so they get click priority; the popup is
    always on top.
    """

    density: list[pdk.Layer] = field(default_factory=list)
    markers: list[pdk.Layer] = field(default_factory=list)
    popup: list[pdk.Layer] = field(default_factory=list)

    def get_ordered_layers(self) -> list[pdk.Layer]:
        """Return all layers in correct z-order (back to front)."""
        return self.density + self.markers + self.popup


class _SceneVersionListener:
    """Bumps the owning surface's scene version when the selection changes."""

    def __init__(self, surface: "MapSurface") -> None:
        self._surface = surface

    def after_transition(self, event: str, source: State, target: State) -> None:
        if not changes_selection(source=source, target=target):
            return
        self._surface._bump_version(reason=f"{event}: {source.name} -> {target.name}")


class MapSurface:
    """Composes density field, markers and popup over a live camera."""

    def __init__(
        self,
        dataset: GeoDataset,
        view_state: ViewState | None = None,
        builder: DensityLayerBuilder | None = None,
        add_ui_listener: bool = False,
        gate: LoadingGate | None = None,
    ) -> None:
        """Initialize the surface.

        Args:
            dataset: Risk observations (owned by the caller, never mutated)
            view_state: Initial camera (defaults to MapConfig start view)
            builder: Density builder (defaults to DensityConfig curves)
            add_ui_listener: If True, selection changes trigger a Streamlit rerun.
                             Leave False for tests and non-Streamlit usage.
            gate: LoadingGate to open once construction completes
        """
        if not isinstance(dataset, GeoDataset):
            raise ValueError(f"MapSurface needs a GeoDataset, got {type(dataset).__name__}")

        self.dataset = dataset
        self.scene_version = 0
        self._view_state = view_state or ViewState()
        self._density = (builder or DensityLayerBuilder()).build(dataset)
        self._markers = MarkerLayer(dataset)
        self._detector = ClickDetector()

        self._selection, _ = SelectionStateMachine.create(
            add_ui_listener=add_ui_listener,
            listeners=[_SceneVersionListener(surface=self)],
        )

        self.gate = gate or LoadingGate()
        self.gate.open()
        logger.info(f"MapSurface ready: {len(dataset)} observations, {self._view_state!r}")

    # =========================================================================
    # STATE ACCESS
    # =========================================================================

    @property
    def ready(self) -> LoadingGate:
        """Ready signal (opened at the end of construction)."""
        return self.gate

    @property
    def view_state(self) -> ViewState:
        return self._view_state

    @property
    def selection(self) -> SelectionStateMachine:
        return self._selection

    @property
    def selected_observation(self) -> RiskObservation | None:
        return self._selection.selected_observation

    @property
    def density_field(self) -> DensityField:
        return self._density

    @property
    def marker_layer(self) -> MarkerLayer:
        return self._markers

    def _bump_version(self, reason: str) -> None:
        self.scene_version += 1
        logger.debug(f"[RENDER] Scene v{self.scene_version} ({reason})")

    # =========================================================================
    # EVENT HANDLERS
    # =========================================================================

    def on_gesture(self, new_view_state: ViewState) -> None:
        """Replace the camera wholesale. Never touches the selection."""
        if not isinstance(new_view_state, ViewState):
            raise ValueError(f"on_gesture needs a ViewState, got {type(new_view_state).__name__}")
        old = self._view_state
        self._view_state = new_view_state
        logger.info(f"[VIEW] {old!r} -> {new_view_state!r}")
        self._bump_version(reason="gesture")

    def on_map_click(self, hit_features: Sequence[Mapping[str, Any]]) -> bool:
        """Select the topmost hit feature's observation.

        Args:
            hit_features: Intersecting feature payloads in draw order (back to front)

        Returns:
            True if something was selected, False if the click hit nothing usable.
        """
        infos = self._detector.parse_hits(hit_features)
        for info in reversed(infos):
            if self.dispatch_click(click_info=info):
                return True
        logger.debug(f"[CLICK] Map click with {len(hit_features)} hits selected nothing")
        return False

    def on_marker_click(self, observation: RiskObservation, index: int | None = None) -> None:
        """Select an observation directly, bypassing hit-testing.

        Args:
            observation: Observation to show in the popup
            index: Its position in the dataset. Needed when the dataset holds
                   equal observations; looked up by equality when omitted.

        Raises:
            ValueError: If index does not point at an equal observation
        """
        if index is None:
            index = self.dataset.index_of(observation)
        elif not 0 <= index < len(self.dataset) or self.dataset[index] != observation:
            raise ValueError(f"Observation at index {index} does not match {observation!r}")
        self._select(observation=observation, index=index)

    def on_marker_index_click(self, index: int) -> bool:
        """Select the observation behind marker #index."""
        if not 0 <= index < len(self.dataset):
            logger.warning(f"[CLICK] Marker index {index} out of range (dataset has {len(self.dataset)})")
            return False
        self._select(observation=self.dataset[index], index=index)
        return True

    def on_dismiss(self) -> None:
        """Close the popup (no-op when nothing is selected)."""
        self._selection.dismiss()

    def dispatch_click(self, click_info: ClickInfo) -> bool:
        """Route a parsed click to the single select entry point."""
        logger.info(f"[CLICK] {click_info.display_name}")
        if click_info.observation_index is not None:
            return self.on_marker_index_click(click_info.observation_index)
        self.on_marker_click(click_info.observation)
        return True

    def _select(self, observation: RiskObservation, index: int | None) -> None:
        self._selection.select(observation=observation, index=index)

    # =========================================================================
    # CAMERA HELPERS
    # =========================================================================

    def reset_view(self) -> None:
        """Return to the configured start view."""
        self.on_gesture(ViewState())

    def center_on_data(self) -> bool:
        """Center the camera on the dataset centroid, keeping the zoom."""
        centroid = self.dataset.centroid()
        if centroid is None:
            return False
        self.on_gesture(self._view_state.with_center(lon=centroid[0], lat=centroid[1]))
        return True

    # =========================================================================
    # COMPOSITION
    # =========================================================================

    def compose(self) -> Scene:
        """Build the scene from the current camera and selection."""
        popup = None
        if self._selection.is_selected:
            popup = Popup(observation=self.selected_observation, index=self._selection.selected_index)
        return Scene(
            view_state=self._view_state,
            density=self._density.params_at(self._view_state.zoom),
            density_field=self._density,
            markers=self._markers.markers,
            popup=popup,
            version=self.scene_version,
        )

    def render_deck(self) -> pdk.Deck:
        """Render complete map with all layers.

        Z-order (back to front): density -> markers -> popup
        """
        scene = self.compose()
        zoom = scene.view_state.zoom
        layers = LayerCollection()
        layers.density.append(self._density.to_pydeck_layer(zoom=zoom))
        layers.markers.append(self._markers.to_pydeck_layer(zoom=zoom))
        if scene.popup is not None:
            layers.popup.extend(self._create_popup_layers(popup=scene.popup))

        logger.debug(f"[RENDER] Deck v{scene.version}: popup={scene.popup is not None}")
        return pdk.Deck(
            map_style=MapConfig.MAP_STYLE,
            map_provider=MapConfig.MAP_PROVIDER,
            initial_view_state=scene.view_state.to_pydeck(),
            layers=layers.get_ordered_layers(),
            tooltip=self._create_tooltip_config(),
            parameters={"pickingRadius": ClickConfig.PICKING_RADIUS_PX},
        )

    @staticmethod
    def _create_popup_layers(popup: Popup) -> list[pdk.Layer]:
        data = [
            {
                "type": ClickConfig.TYPE_POPUP,
                "position": [popup.lon, popup.lat],
                "text": f"{popup.title}\n{popup.body}",
            }
        ]
        return [
            pdk.Layer(
                "ScatterplotLayer",
                data,
                get_position="position",
                get_radius=MarkerConfig.POPUP_RING_RADIUS_PX,
                radius_units="pixels",
                filled=False,
                stroked=True,
                get_line_color=MarkerConfig.POPUP_RING_COLOR,
                line_width_min_pixels=2,
                pickable=False,
                id="popup_ring",
            ),
            pdk.Layer(
                "TextLayer",
                data,
                get_position="position",
                get_text="text",
                get_size=MarkerConfig.POPUP_TEXT_SIZE,
                get_color=MarkerConfig.POPUP_TEXT_COLOR,
                get_pixel_offset=MarkerConfig.POPUP_TEXT_OFFSET_PX,
                background=True,
                get_background_color=[17, 24, 39, 230],
                pickable=False,
                id="popup_text",
            ),
        ]

    @staticmethod
    def _create_tooltip_config() -> dict[str, str | dict[str, str]]:
        """Pydeck tooltip configuration - name only, details in the popup."""
        return {
            "html": "<b>{name}</b>",
            "style": {
                "backgroundColor": "rgba(255, 255, 255, 0.95)",
                "color": "#333",
                "padding": "6px 10px",
                "borderRadius": "4px",
            },
        }
