"""
Basemap obstacles

Anything already drawn on the map that generated houses must stay out of:
road surfaces, junctions, sidewalks, parks, water, existing buildings.
Obstacles only need a bounding box and a point test, so new kinds can be
added without touching the filter.
"""

from typing import Iterable, List, Optional, Protocol, runtime_checkable

from loguru import logger
from shapely import prepared
from shapely.geometry import Point, Polygon, box
from shapely.strtree import STRtree

from .geometry_utils import Bounds
from .network.models import Lane, Road, RoadNetwork


@runtime_checkable
class Obstacle(Protocol):
    """Capability shared by every basemap feature"""
    id: str
    kind: str

    @property
    def bounds(self) -> Bounds:
        ...

    def contains_point(self, x: float, y: float) -> bool:
        ...


class AreaObstacle:
    """Solid area: park, water, existing building footprint"""

    def __init__(self, id: str, kind: str, polygon: Polygon):
        self.id = id
        self.kind = kind
        self.polygon = polygon
        self._prepared = prepared.prep(polygon)

    @property
    def bounds(self) -> Bounds:
        return self.polygon.bounds

    def contains_point(self, x: float, y: float) -> bool:
        return self._prepared.contains(Point(x, y))

    def __repr__(self):
        return f"AreaObstacle(id={self.id!r}, kind={self.kind!r})"


class RoadObstacle(AreaObstacle):
    """Road surface built by buffering the centerline by half its width"""

    def __init__(self, id: str, centerline, width_m: float):
        surface = centerline.buffer(width_m / 2.0, cap_style="flat")
        super().__init__(id, "road", surface)
        self.width_m = width_m

    def __repr__(self):
        return f"RoadObstacle(id={self.id!r}, width_m={self.width_m})"


class LaneObstacle(AreaObstacle):
    """Strip of a lane's width along its center, e.g. a sidewalk"""

    def __init__(self, lane: Lane, width_m: float):
        surface = lane.center.buffer(width_m / 2.0, cap_style="flat")
        super().__init__(f"lane_{lane.id}", lane.kind, surface)
        self.lane_id = lane.id


class OutlineObstacle:
    """
    Thin band around a polygon's boundary, like a drawn outline

    Only points on the band count as contained; the interior is hollow.
    """

    def __init__(self, id: str, kind: str, polygon: Polygon, thickness_m: float = 0.5):
        self.id = id
        self.kind = kind
        self.outline = polygon.exterior.buffer(thickness_m / 2.0)
        self._prepared = prepared.prep(self.outline)

    @property
    def bounds(self) -> Bounds:
        return self.outline.bounds

    def contains_point(self, x: float, y: float) -> bool:
        return self._prepared.contains(Point(x, y))

    def __repr__(self):
        return f"OutlineObstacle(id={self.id!r}, kind={self.kind!r})"


class Basemap:
    """
    Read-only collection of obstacles with bounding-box queries

    Not safe to share across threads while queries run.
    """

    def __init__(self, obstacles: Optional[Iterable[Obstacle]] = None):
        self.obstacles: List[Obstacle] = list(obstacles or [])
        self._tree = STRtree([box(*o.bounds) for o in self.obstacles]) if self.obstacles else None

    def __len__(self):
        return len(self.obstacles)

    def query(self, bounds: Bounds) -> List[Obstacle]:
        """Obstacles whose bounding box intersects `bounds`, in insertion order"""
        if self._tree is None:
            return []
        hits = self._tree.query(box(*bounds))
        return [self.obstacles[i] for i in sorted(int(i) for i in hits)]

    @classmethod
    def from_network(
        cls,
        network: RoadNetwork,
        areas: Optional[Iterable[Obstacle]] = None,
        lane_width_m: float = 2.0
    ) -> "Basemap":
        """
        Everything the map already draws: road surfaces, the junctions where
        roads meet, lanes (sidewalks included), existing building footprints,
        plus extra areas
        """
        roads = [
            road for road in network.roads.values()
            if road.centerline is not None and road.centerline.length > 0
        ]
        obstacles: List[Obstacle] = []
        for road in roads:
            obstacles.append(RoadObstacle(f"road_{road.id}", road.centerline, road.width_m))
        obstacles.extend(cls._junctions(roads, lane_width_m))
        for lane in network.all_lanes():
            if lane.length > 0:
                obstacles.append(LaneObstacle(lane, lane_width_m))
        for building in network.all_buildings():
            if building.footprint is not None and not building.footprint.is_empty:
                obstacles.append(AreaObstacle(f"building_{building.id}", "building", building.footprint))
        if areas:
            obstacles.extend(areas)

        logger.info(f"Basemap has {len(obstacles)} obstacles")
        return cls(obstacles)

    @staticmethod
    def _junctions(roads: List[Road], lane_width_m: float) -> List[AreaObstacle]:
        """
        A disc wherever two road centerlines meet, wide enough to cover both
        carriageways and their sidewalks. Fills the wedges flat road ends
        leave open at angled joins.
        """
        if len(roads) < 2:
            return []
        tree = STRtree([road.centerline for road in roads])
        junctions: List[AreaObstacle] = []
        seen = set()
        for i, road in enumerate(roads):
            hits = tree.query(road.centerline, predicate="intersects")
            for j in sorted(int(j) for j in hits):
                if j <= i:
                    continue
                other = roads[j]
                shared = road.centerline.intersection(other.centerline)
                radius = max(road.width_m, other.width_m) / 2.0 + lane_width_m
                for part in getattr(shared, "geoms", [shared]):
                    # Collinear overlaps are already road surface
                    if part.geom_type != "Point":
                        continue
                    key = (round(part.x, 3), round(part.y, 3))
                    if key in seen:
                        continue
                    seen.add(key)
                    junctions.append(AreaObstacle(
                        f"junction_{len(junctions)}", "junction", part.buffer(radius)
                    ))
        return junctions
