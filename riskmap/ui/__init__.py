"""User interface components for the risk map.

File Structure:
- map_surface.py: MapSurface (camera + selection owner, scene composition)
- density_layer.py: DensityLayerBuilder -> DensityField (HeatmapLayer)
- marker_layer.py: MarkerLayer (pickable ScatterplotLayer)
- overlays.py: Legend, EmergencyContactDialog, LoadingGate

Core Components:
- state_machine.py: SelectionStateMachine (2 states) + SelectionContext
- click_detector.py: Picked payload -> ClickInfo
- pydeck_click_handler.py: st_deckgl rendering with click capture
- validators.py: Input validation with Optional[Message] returns
"""

from riskmap.ui.click_detector import ClickDetector
from riskmap.ui.density_layer import DensityField, DensityLayerBuilder, DensityLayerParams, DensityPoint
from riskmap.ui.map_surface import LayerCollection, MapSurface, Popup, Scene
from riskmap.ui.marker_layer import Marker, MarkerLayer
from riskmap.ui.overlays import EmergencyContact, EmergencyContactDialog, Legend, LoadingGate
from riskmap.ui.state_machine import SelectionContext, SelectionStateMachine, StreamlitUIListener

__all__ = [
    "ClickDetector",
    "DensityField",
    "DensityLayerBuilder",
    "DensityLayerParams",
    "DensityPoint",
    "EmergencyContact",
    "EmergencyContactDialog",
    "LayerCollection",
    "Legend",
    "LoadingGate",
    "MapSurface",
    "Marker",
    "MarkerLayer",
    "Popup",
    "Scene",
    "SelectionContext",
    "SelectionStateMachine",
    "StreamlitUIListener",
]
