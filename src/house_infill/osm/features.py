"""
Feature parsing for water, parks and other areas

Closed non-building, non-road ways become basemap obstacles
"""

from typing import List, Optional

from shapely.geometry import Polygon

from ..basemap import AreaObstacle
from ..config import NetworkConfig, get_config
from .models import OSMWay
from .roads import Projector


class FeatureProcessor:
    """Processes area features into obstacles"""

    AREA_KEYS = ("natural", "landuse", "leisure", "amenity", "water")

    def __init__(self, network_config: Optional[NetworkConfig] = None):
        self.config = network_config or get_config().network

    def area_type(self, way: OSMWay) -> Optional[str]:
        for key in self.AREA_KEYS:
            value = way.tags.get(key)
            if value in self.config.obstacle_area_types:
                return value
        return None

    def parse_areas(self, ways: List[OSMWay], project: Projector) -> List[AreaObstacle]:
        areas = []
        for way in ways:
            if "building" in way.tags or "highway" in way.tags:
                continue
            kind = self.area_type(way)
            if kind is None or not way.is_closed():
                continue
            polygon = Polygon(project(way.get_coordinates()))
            if not polygon.is_valid:
                polygon = polygon.buffer(0)
            if polygon.is_empty or polygon.geom_type != "Polygon":
                continue
            areas.append(AreaObstacle(f"{kind}_{way.id}", kind, polygon))
        return areas
