"""Risk Map - Interactive emergency-risk visualization application.

Shows a heatmap of risk intensity and clickable risk markers over a dark
basemap, with a detail popup for the selected marker, a legend and an
emergency contacts dialog.

Run: streamlit run riskmap/app.py
"""

import json
import logging
import traceback

import streamlit as st

from riskmap.constants import AppConfig, MapConfig
from riskmap.model.geo_dataset import GeoDataset, sample_dataset
from riskmap.model.message import LoadingMessage, ObservationDetailMessage, SelectionHintMessage
from riskmap.ui import EmergencyContactDialog, Legend, MapSurface
from riskmap.ui.infra import bump_map_version, trigger_rerun
from riskmap.ui.pydeck_click_handler import render_pydeck_map

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


# =============================================================================
# SESSION STATE
# =============================================================================


def init_session_state() -> None:
    """Initialize session state with dataset and map surface."""
    if "dataset" not in st.session_state:
        st.session_state.dataset = sample_dataset()

    if "surface" not in st.session_state:
        st.session_state.surface = MapSurface(dataset=st.session_state.dataset, add_ui_listener=True)

    if "map_version" not in st.session_state:
        st.session_state.map_version = 0

    if "_upload_counter" not in st.session_state:
        st.session_state._upload_counter = 0


def reset_ui_state() -> None:
    """Reset camera and selection while preserving the dataset.

    Called when an error occurs to recover gracefully.
    """
    logger.info("Resetting UI state due to error recovery")
    st.session_state.surface = MapSurface(dataset=st.session_state.dataset, add_ui_listener=True)
    st.session_state.map_version = st.session_state.get("map_version", 0) + 1
    logger.info("UI state reset complete - dataset preserved")


def load_dataset(feature_collection: dict) -> None:
    """Swap in a new dataset; camera and selection start fresh."""
    dataset = GeoDataset.from_geojson(feature_collection)
    st.session_state.dataset = dataset
    surface = MapSurface(dataset=dataset, add_ui_listener=True)
    surface.center_on_data()
    st.session_state.surface = surface
    bump_map_version()
    trigger_rerun()


def handle_upload(raw: bytes) -> bool:
    """Load an uploaded GeoJSON file. An invalid file keeps the current dataset.

    Returns:
        True if the new dataset was loaded
    """
    try:
        load_dataset(json.loads(raw))
    except ValueError as e:
        # json and unicode decode errors are ValueErrors too
        logger.warning(f"GeoJSON upload rejected: {e}")
        st.sidebar.error(f"Invalid GeoJSON: {e}")
        return False
    return True


# =============================================================================
# SIDEBAR
# =============================================================================


def _render_sidebar(surface: MapSurface) -> None:
    """Camera controls and dataset upload."""
    st.sidebar.header("🗺️ View")
    view = surface.view_state
    zoom = st.sidebar.slider(
        "Zoom",
        min_value=MapConfig.MIN_ZOOM,
        max_value=MapConfig.MAX_ZOOM,
        value=float(min(max(view.zoom, MapConfig.MIN_ZOOM), MapConfig.MAX_ZOOM)),
        step=MapConfig.ZOOM_STEP,
    )
    if zoom != view.zoom:
        surface.on_gesture(view.with_zoom(zoom))
        bump_map_version()

    col_reset, col_center = st.sidebar.columns(2)
    if col_reset.button("Reset View", key="reset_view"):
        surface.reset_view()
        bump_map_version()
    if col_center.button("Center on Data", key="center_on_data", disabled=surface.dataset.is_empty):
        surface.center_on_data()
        bump_map_version()

    st.sidebar.header("📂 Risk Data")
    st.sidebar.caption(f"{len(surface.dataset)} observations loaded")
    uploaded = st.sidebar.file_uploader(
        "Load GeoJSON",
        type=["geojson", "json"],
        key=f"geojson_upload_{st.session_state._upload_counter}",
    )
    if uploaded is not None:
        st.session_state._upload_counter += 1
        handle_upload(uploaded.getvalue())


# =============================================================================
# MAP RENDERING
# =============================================================================


def _render_map(surface: MapSurface) -> None:
    """Render the deck and dispatch any new click."""
    deck = surface.render_deck()
    map_key = f"risk_map_{st.session_state.map_version}"
    click_result = render_pydeck_map(deck=deck, key=map_key, height=MapConfig.MAP_HEIGHT_PX)

    if click_result.is_empty:
        return
    # Selection changes trigger a rerun through the state machine listener
    surface.on_map_click(click_result.hit_features)


def _render_detail_panel(surface: MapSurface) -> None:
    """Popup details for the selected observation, or a hint."""
    st.subheader("📍 Details")
    observation = surface.selected_observation
    if observation is None:
        SelectionHintMessage(observation_count=len(surface.dataset)).display()
        return

    ObservationDetailMessage(observation=observation).display()
    if st.button("✖ Close", key="dismiss_popup"):
        bump_map_version()
        surface.on_dismiss()


# =============================================================================
# MAIN
# =============================================================================


def main() -> None:
    """Application entry point."""
    st.set_page_config(page_title=AppConfig.TITLE, page_icon=AppConfig.ICON, layout=AppConfig.LAYOUT)
    init_session_state()

    col_title, col_contacts = st.columns([4, 1])
    col_title.title(AppConfig.TITLE)
    with col_contacts:
        EmergencyContactDialog().render_trigger()

    surface: MapSurface = st.session_state.surface
    if not surface.ready.is_ready:
        LoadingMessage().display()
        return

    try:
        _run_app_ui(surface=surface)
    except Exception as e:
        error_msg = f"{type(e).__name__}: {e}"
        full_traceback = traceback.format_exc()
        logger.error(f"[UI] UI error caught: {error_msg}\n{full_traceback}")

        st.error(f"⚠️ [UI] Something went wrong: {error_msg}")

        # Reset camera/selection while preserving the dataset
        reset_ui_state()

        if st.button("🔄 Reset and Continue", type="primary"):
            st.rerun()


def _run_app_ui(surface: MapSurface) -> None:
    """Run the main application UI. Separated for error handling wrapper."""
    logger.info(
        f"[MAIN] Render cycle starting: state={surface.selection.get_state_name()}, "
        f"scene={surface.scene_version}, map_version={st.session_state.map_version}"
    )

    _render_sidebar(surface=surface)

    col_map, col_side = st.columns([3, 1])
    with col_map:
        _render_map(surface=surface)
    with col_side:
        _render_detail_panel(surface=surface)
        Legend().render()


if __name__ == "__main__":
    main()
