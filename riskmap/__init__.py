"""Risk Map - Interactive emergency-risk visualization.

A pannable/zoomable map showing risk intensity as a heatmap plus clickable
risk markers, with a single detail popup and a static legend.

Modules:
    core: Interpolation curves and color ramps
    model: Data structures (RiskObservation, GeoDataset, ViewState, ClickInfo)
    ui: Streamlit/Pydeck components (MapSurface, layers, selection state machine)

Example:
    from riskmap.model import sample_dataset
    from riskmap.ui import MapSurface

    surface = MapSurface(dataset=sample_dataset())
    deck = surface.render_deck()
"""
