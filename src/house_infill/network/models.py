"""
Road network data models

Read-only view of the map that generation works against. Geometry is in
local meters.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from shapely.geometry import LineString, Point, Polygon

from ..errors import MalformedGeometryError
from ..geometry_utils import GeometryUtils

SIDEWALK = "sidewalk"


@dataclass
class Road:
    """A road with OSM-style classification tags"""
    id: str
    tags: Dict[str, str]
    centerline: Optional[LineString] = None
    width_m: float = 5.0

    def is_tagged(self, key: str, value: str) -> bool:
        return self.tags.get(key) == value


@dataclass
class Lane:
    """A lane belonging to a road; sidewalks are lanes of kind 'sidewalk'"""
    id: str
    road_id: str
    center: LineString
    kind: str = SIDEWALK

    @property
    def is_sidewalk(self) -> bool:
        return self.kind == SIDEWALK

    @property
    def length(self) -> float:
        return self.center.length

    def dist_along(self, distance: float) -> Tuple[Point, float]:
        """Point and tangent angle (degrees) on the lane center at `distance`"""
        try:
            return GeometryUtils.dist_along(self.center, distance)
        except MalformedGeometryError as e:
            raise MalformedGeometryError(f"Lane {self.id}: {e}") from e


@dataclass
class ExistingBuilding:
    """A building already in the map"""
    id: str
    sidewalk_lane_id: Optional[str] = None
    footprint: Optional[Polygon] = None


@dataclass
class GPSReference:
    """Origin of the local metric frame"""
    lon: float
    lat: float


@dataclass
class RoadNetwork:
    """
    Roads, lanes and existing buildings

    Lanes and buildings keep their input order; everything downstream
    iterates in that order so runs are reproducible.
    """
    roads: Dict[str, Road] = field(default_factory=dict)
    lanes: List[Lane] = field(default_factory=list)
    buildings: List[ExistingBuilding] = field(default_factory=list)
    gps_reference: Optional[GPSReference] = None

    def __post_init__(self):
        self._lanes_by_id = {lane.id: lane for lane in self.lanes}

    def add_lane(self, lane: Lane):
        if lane.id in self._lanes_by_id:
            raise ValueError(f"Duplicate lane id: {lane.id}")
        self.lanes.append(lane)
        self._lanes_by_id[lane.id] = lane

    def all_lanes(self) -> Iterator[Lane]:
        return iter(self.lanes)

    def all_buildings(self) -> Iterator[ExistingBuilding]:
        return iter(self.buildings)

    def get_road(self, road_id: str) -> Road:
        return self.roads[road_id]

    def get_lane(self, lane_id: str) -> Lane:
        return self._lanes_by_id[lane_id]
