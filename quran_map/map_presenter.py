"""
Map presentation for the topic and revelation locations.

The browser draws the map with Leaflet; this module keeps the server-side
model of that widget (view, tile layer, markers, fitted bounds) and hands the
page a JSON snapshot to draw from.
"""

import html
import logging
from dataclasses import dataclass, field, asdict
from typing import Dict, List, Optional, Tuple

Point = Tuple[float, float]

TILE_URL = 'https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png'
TILE_ATTRIBUTION = '&copy; <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> contributors'

# Map starts centered on the Middle East
DEFAULT_CENTER = (25.0, 38.0)
DEFAULT_ZOOM = 5
MAX_ZOOM = 19
FIT_PADDING = (50, 50)

MARKER_STYLES = {
    'topic': {'color': '#3b82f6', 'glyph': '📍', 'title': 'Topic Location'},
    'revelation': {'color': '#10b981', 'glyph': '🕌', 'title': 'Revelation Location'},
}


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned lat/lon box, Leaflet's LatLngBounds."""
    south: float
    west: float
    north: float
    east: float

    @classmethod
    def from_points(cls, *points: Point) -> 'Bounds':
        lats = [p[0] for p in points]
        lons = [p[1] for p in points]
        return cls(min(lats), min(lons), max(lats), max(lons))

    def contains(self, point: Point) -> bool:
        lat, lon = point
        return self.south <= lat <= self.north and self.west <= lon <= self.east

    def to_list(self) -> List[List[float]]:
        return [[self.south, self.west], [self.north, self.east]]


@dataclass
class Marker:
    role: str
    latitude: float
    longitude: float
    label: str

    @property
    def point(self) -> Point:
        return (self.latitude, self.longitude)

    @property
    def color(self) -> str:
        return MARKER_STYLES[self.role]['color']

    @property
    def glyph(self) -> str:
        return MARKER_STYLES[self.role]['glyph']

    @property
    def popup(self) -> str:
        return f"<b>{MARKER_STYLES[self.role]['title']}</b><br>{html.escape(self.label)}"

    def to_dict(self) -> Dict:
        data = asdict(self)
        data.update({'color': self.color, 'glyph': self.glyph, 'popup': self.popup})
        return data


@dataclass
class MapWidget:
    """State of the Leaflet map shown on the page."""
    center: Point = DEFAULT_CENTER
    zoom: int = DEFAULT_ZOOM
    tile_url: str = TILE_URL
    attribution: str = TILE_ATTRIBUTION
    max_zoom: int = MAX_ZOOM
    layers: List[Marker] = field(default_factory=list)
    fitted_bounds: Optional[Bounds] = None
    fit_padding: Optional[Tuple[int, int]] = None

    def add_layer(self, marker: Marker):
        self.layers.append(marker)

    def remove_layer(self, marker: Marker):
        self.layers = [layer for layer in self.layers if layer is not marker]

    def fit_bounds(self, bounds: Bounds, padding: Tuple[int, int]):
        self.fitted_bounds = bounds
        self.fit_padding = padding

    def to_dict(self) -> Dict:
        return {
            'center': list(self.center),
            'zoom': self.zoom,
            'tile_url': self.tile_url,
            'attribution': self.attribution,
            'max_zoom': self.max_zoom,
            'markers': [marker.to_dict() for marker in self.layers],
            'bounds': self.fitted_bounds.to_list() if self.fitted_bounds else None,
            'padding': list(self.fit_padding) if self.fit_padding else None,
        }


class MapPresenter:
    """Owns the map widget and one marker per role."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self.map: Optional[MapWidget] = None
        self.topic_marker: Optional[Marker] = None
        self.revelation_marker: Optional[Marker] = None

    def ensure_map(self) -> MapWidget:
        """Create the map widget on first use."""
        if self.map is None:
            self.map = MapWidget()
            self.logger.info("Map widget initialized")
        return self.map

    def render(self, topic_point: Point, revelation_point: Point,
               topic_label: str, revelation_label: str) -> Bounds:
        """Show both locations, replacing any previous markers, and frame them."""
        widget = self.ensure_map()

        if self.topic_marker:
            widget.remove_layer(self.topic_marker)
        if self.revelation_marker:
            widget.remove_layer(self.revelation_marker)

        self.topic_marker = Marker('topic', float(topic_point[0]), float(topic_point[1]), topic_label)
        widget.add_layer(self.topic_marker)

        self.revelation_marker = Marker('revelation', float(revelation_point[0]),
                                        float(revelation_point[1]), revelation_label)
        widget.add_layer(self.revelation_marker)

        bounds = Bounds.from_points(self.topic_marker.point, self.revelation_marker.point)
        widget.fit_bounds(bounds, FIT_PADDING)
        self.logger.debug(f"Map framed to {bounds.to_list()}")
        return bounds

    def snapshot(self) -> Optional[Dict]:
        return self.map.to_dict() if self.map else None
