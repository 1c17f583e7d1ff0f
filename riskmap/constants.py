"""Configuration constants for the Risk Map.

All configurable parameters are centralized here for easy tuning.

Classes:
    AppConfig: UI application settings
    MapConfig: Default map view parameters
    DensityConfig: Heatmap interpolation control points and color ramp
    MarkerConfig: Risk marker and popup styling
    ClickConfig: Object type tags for click detection
    LegendConfig: Risk tiers shown in the legend
    EmergencyContactConfig: Static emergency numbers
"""


class AppConfig:
    """UI application settings."""

    TITLE = "Emergency Response Map"
    ICON = "🚨"
    LAYOUT = "wide"


class MapConfig:
    """Default map view parameters."""

    # Initial center for program start: New Delhi, India
    START_CENTER_LAT = 28.6139  # Latitude
    START_CENTER_LON = 77.2090  # Longitude
    DEFAULT_ZOOM = 11.0

    # Range offered by the sidebar camera controls (deck.gl clamps on its own)
    MIN_ZOOM = 0.0
    MAX_ZOOM = 20.0
    ZOOM_STEP = 0.5

    # Flat 2D map
    DEFAULT_PITCH = 0.0
    DEFAULT_BEARING = 0.0

    # Dark basemap, no API token needed with the carto provider
    MAP_STYLE = "https://basemaps.cartocdn.com/gl/dark-matter-gl-style/style.json"
    MAP_PROVIDER = "carto"

    MAP_HEIGHT_PX = 560


class DensityConfig:
    """Heatmap curves as explicit (input, output) control points."""

    # riskScore -> heatmap weight
    WEIGHT_STOPS = [(0.0, 0.0), (6.0, 1.0)]
    # zoom -> intensity multiplier
    INTENSITY_STOPS = [(0.0, 1.0), (9.0, 3.0)]
    # zoom -> kernel radius in pixels
    RADIUS_STOPS = [(0.0, 2.0), (9.0, 20.0)]

    # density -> RGBA (alpha 0-255), transparent blue through white to opaque red
    COLOR_STOPS = [
        (0.0, (33, 102, 172, 0)),
        (0.2, (103, 169, 207, 255)),
        (0.4, (209, 229, 240, 255)),
        (0.6, (253, 219, 199, 255)),
        (0.8, (239, 138, 98, 255)),
        (1.0, (178, 24, 43, 255)),
    ]
    assert COLOR_STOPS[0][0] == 0.0 and COLOR_STOPS[-1][0] == 1.0

    OPACITY = 0.7

    # deck.gl HeatmapLayer spreads colorRange evenly over the density domain
    COLOR_RANGE_SIZE = len(COLOR_STOPS)


class MarkerConfig:
    """Risk marker and popup styling."""

    # zoom -> marker radius in pixels (markers grow slightly as you zoom in)
    RADIUS_STOPS = [(0.0, 4.0), (16.0, 10.0)]
    MIN_RADIUS_PX = 3.0
    BORDER_COLOR = [255, 255, 255, 220]
    HIGHLIGHT_COLOR = [255, 255, 0, 180]

    # Popup ring drawn around the selected observation
    POPUP_RING_COLOR = [255, 255, 255, 255]
    POPUP_RING_RADIUS_PX = 16
    POPUP_TEXT_COLOR = [255, 255, 255, 255]
    POPUP_TEXT_SIZE = 14
    POPUP_TEXT_OFFSET_PX = [0, -28]


class ClickConfig:
    """Object type tags embedded in layer data for click detection.

    deck.gl spreads the picked record into the click event, so every
    pickable record carries a "type" field naming its layer kind.
    """

    TYPE_MARKER = "risk_marker"
    TYPE_DENSITY = "density_point"
    TYPE_POPUP = "popup"
    TYPE_FEATURE = "Feature"  # Raw GeoJSON feature payloads

    MARKER_ID_PREFIX = "R"  # "R0", "R1", ...

    # Pixel tolerance around the cursor for picking
    PICKING_RADIUS_PX = 6


class LegendConfig:
    """Risk tiers shown in the legend card and used to color markers."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    TIERS = [HIGH, MEDIUM, LOW]

    # Minimum score for each tier (checked top-down). The sample "Low risk
    # area" scores 2 and must land in LOW.
    TIER_MIN_SCORE = {
        HIGH: 4.0,
        MEDIUM: 3.0,
        LOW: float("-inf"),
    }
    assert set(TIER_MIN_SCORE.keys()) == set(TIERS)

    # Tailwind CSS palette
    TIER_COLORS = {
        HIGH: "#EF4444",  # red-500
        MEDIUM: "#F97316",  # orange-500
        LOW: "#EAB308",  # yellow-500
    }
    assert set(TIER_COLORS.keys()) == set(TIERS)

    TIER_LABELS = {
        HIGH: "High Risk",
        MEDIUM: "Medium Risk",
        LOW: "Low Risk",
    }
    assert set(TIER_LABELS.keys()) == set(TIERS)

    TITLE = "Risk Levels"

    @staticmethod
    def tier_for_score(risk_score: float) -> str:
        """Classify a risk score into one of the legend tiers."""
        for tier in LegendConfig.TIERS:
            if risk_score >= LegendConfig.TIER_MIN_SCORE[tier]:
                return tier
        raise ValueError(f"Invalid risk score: {risk_score}")

    @staticmethod
    def hex_to_rgba(hex_color: str, alpha: int = 255) -> list[int]:
        """Convert '#RRGGBB' to a deck.gl [R, G, B, A] list."""
        hex_color = hex_color.lstrip("#")
        if len(hex_color) != 6:
            raise ValueError(f"Expected #RRGGBB color, got '#{hex_color}'")
        return [int(hex_color[i : i + 2], 16) for i in (0, 2, 4)] + [alpha]


class EmergencyContactConfig:
    """Static emergency numbers shown in the contacts dialog."""

    TITLE = "Emergency Contact Numbers"
    BUTTON_LABEL = "Emergency Contacts"

    # (label, number)
    CONTACTS = [
        ("Police", "100"),
        ("Ambulance", "102"),
        ("Emergency Helpline", "112"),
    ]

    MIN_DIGITS = 2
    MAX_DIGITS = 15  # E.164 upper bound
