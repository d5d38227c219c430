"""Configuration for the map projection."""

from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass
class MapProjectionConfig:
    """Viewport defaults and zoom bands for the map projection"""
    default_longitude: float = -95.0
    default_latitude: float = 55.0
    default_zoom: float = 3.5
    min_span_deg: float = 0.1
    max_zoom: float = 6.5
    # (span threshold in degrees, zoom) checked from widest to narrowest
    zoom_bands: List[Tuple[float, float]] = field(default_factory=lambda: [
        (40.0, 2.5),
        (20.0, 3.2),
        (10.0, 4.2),
        (5.0, 5.0),
    ])

    def __post_init__(self):
        """Post-initialization validation"""
        if self.min_span_deg <= 0:
            raise ValueError("Minimum span must be positive")


# Default configuration instance
DEFAULT_MAP_CONFIG = MapProjectionConfig()
