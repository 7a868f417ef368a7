"""
Road-specific logic

Turns OSM highway ways into network roads
"""

from typing import Callable, Dict, List, Optional, Tuple

from loguru import logger
from shapely.geometry import LineString

from ..config import NetworkConfig, get_config
from ..network.models import Road
from .models import OSMWay

Projector = Callable[[List[List[float]]], List[Tuple[float, float]]]


class RoadProcessor:
    """Processes and classifies roads from OSM data"""

    def __init__(self, network_config: Optional[NetworkConfig] = None):
        self.config = network_config or get_config().network

    def parse_roads(self, ways: List[OSMWay], project: Projector) -> Dict[str, Road]:
        """
        Parse highway ways into roads keyed by id

        Args:
            ways: List of OSMWay objects
            project: converts [lon, lat] lists to local meters

        Returns:
            Roads in way order
        """
        roads = {}
        for way in ways:
            highway_type = way.tags.get("highway")
            if not highway_type or highway_type in self.config.non_road_highways:
                continue
            coords = way.get_coordinates()
            if len(coords) < 2:
                logger.warning(f"Skipping highway way {way.id} with {len(coords)} points")
                continue
            centerline = LineString(project(coords))
            if centerline.length == 0:
                continue
            road_id = str(way.id)
            roads[road_id] = Road(
                id=road_id,
                tags=dict(way.tags),
                centerline=centerline,
                width_m=self._estimate_road_width(way.tags),
            )
        return roads

    def _estimate_road_width(self, tags: Dict[str, str]) -> float:
        """Width from the 'width' tag, else from lane count, else from type"""
        width = self._parse_number(tags.get("width"))
        if width:
            return width
        lanes = self._parse_number(tags.get("lanes"))
        if lanes:
            return lanes * 3.0
        return self.config.road_widths.get(tags.get("highway", ""), self.config.default_road_width_m)

    @staticmethod
    def _parse_number(value: Optional[str]) -> Optional[float]:
        if not value:
            return None
        try:
            number = float(value.replace("m", "").strip())
        except ValueError:
            return None
        return number if number > 0 else None
