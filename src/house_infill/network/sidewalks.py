"""
Sidewalk logic

Finds residential sidewalks without buildings, derives sidewalk lanes from
road centerlines, and matches existing buildings to the sidewalk they front.
"""

from dataclasses import replace
from typing import List, Optional, Set

from loguru import logger
from shapely.geometry import LineString, Point
from shapely.strtree import STRtree

from ..config import NetworkConfig, get_config
from .models import SIDEWALK, ExistingBuilding, Lane, Road, RoadNetwork


class SidewalkSelector:
    """Picks sidewalks that are eligible for generated houses"""

    def __init__(self, network_config: Optional[NetworkConfig] = None):
        self.config = network_config or get_config().network

    def select(self, network: RoadNetwork) -> List[str]:
        """
        Ids of sidewalk lanes with no existing building that belong to a
        residential road, in lane order
        """
        lanes_with_buildings = self.lanes_with_buildings(network)

        key, value = self.config.residential_tag
        empty_sidewalks = []
        for lane in network.all_lanes():
            if (
                lane.is_sidewalk
                and lane.id not in lanes_with_buildings
                and network.get_road(lane.road_id).is_tagged(key, value)
            ):
                empty_sidewalks.append(lane.id)

        logger.info(
            f"Found {len(empty_sidewalks)} empty residential sidewalks "
            f"({len(lanes_with_buildings)} sidewalks already have buildings)"
        )
        return empty_sidewalks

    @staticmethod
    def lanes_with_buildings(network: RoadNetwork) -> Set[str]:
        lanes = set()
        for building in network.all_buildings():
            if building.sidewalk_lane_id is not None:
                lanes.add(building.sidewalk_lane_id)
        return lanes


class SidewalkBuilder:
    """Derives sidewalk lanes on either side of a road centerline"""

    NO_SIDEWALK = ("no", "none", "separate")

    def __init__(self, network_config: Optional[NetworkConfig] = None):
        self.config = network_config or get_config().network

    def sides_for(self, road: Road) -> List[str]:
        """Which sides ('right', 'left') of the road carry a sidewalk"""
        tag = road.tags.get("sidewalk")
        if tag is None:
            if road.tags.get("highway") in self.config.default_sidewalk_highways:
                return ["right", "left"]
            return []
        if tag in self.NO_SIDEWALK:
            return []
        if tag == "both" or tag == "yes":
            return ["right", "left"]
        if tag in ("right", "left"):
            return [tag]
        logger.debug(f"Road {road.id}: unknown sidewalk tag '{tag}', assuming none")
        return []

    def build(self, road: Road) -> List[Lane]:
        """
        Sidewalk lanes for one road

        The right sidewalk runs with the road and the left one against it,
        so the right-hand side of every sidewalk faces away from the road.
        """
        if road.centerline is None or road.centerline.length == 0:
            return []

        offset = road.width_m / 2.0 + self.config.sidewalk_width_m / 2.0
        lanes = []
        for side in self.sides_for(road):
            # shapely offsets positive distances to the left
            distance = -offset if side == "right" else offset
            curve = road.centerline.offset_curve(distance, join_style="mitre", mitre_limit=5.0)
            center = self._as_line(curve)
            if center is None:
                logger.warning(f"Road {road.id}: could not offset {side} sidewalk, skipping")
                continue
            center = self._orient_like(center, road.centerline)
            if side == "left":
                center = LineString(list(center.coords)[::-1])
            lanes.append(Lane(
                id=f"{road.id}_sidewalk_{side}",
                road_id=road.id,
                center=center,
                kind=SIDEWALK,
            ))
        return lanes

    def build_all(self, network: RoadNetwork) -> int:
        """Add derived sidewalks for every road; returns how many were added"""
        added = 0
        for road in network.roads.values():
            for lane in self.build(road):
                network.add_lane(lane)
                added += 1
        logger.info(f"Derived {added} sidewalks from {len(network.roads)} roads")
        return added

    @staticmethod
    def _orient_like(line: LineString, reference: LineString) -> LineString:
        """`line` running the same way as `reference`"""
        start = Point(reference.coords[0])
        if Point(line.coords[0]).distance(start) > Point(line.coords[-1]).distance(start):
            return LineString(list(line.coords)[::-1])
        return line

    @staticmethod
    def _as_line(geom) -> Optional[LineString]:
        if geom is None or geom.is_empty:
            return None
        if geom.geom_type == "LineString":
            return geom
        if geom.geom_type == "MultiLineString":
            # Tight bends split the offset; keep the main run
            parts = sorted(geom.geoms, key=lambda g: g.length, reverse=True)
            return parts[0]
        return None


def match_buildings_to_sidewalks(
    buildings: List[ExistingBuilding],
    lanes: List[Lane],
    max_distance_m: float
) -> List[ExistingBuilding]:
    """
    Assign each building that has a footprint but no sidewalk to the nearest
    sidewalk within `max_distance_m`

    Buildings that already name a sidewalk are returned unchanged.
    """
    sidewalks = [lane for lane in lanes if lane.is_sidewalk]
    if not sidewalks:
        return list(buildings)

    tree = STRtree([lane.center for lane in sidewalks])
    matched = []
    unmatched = 0
    for building in buildings:
        if building.sidewalk_lane_id is not None or building.footprint is None:
            matched.append(building)
            continue
        hits = tree.query_nearest(building.footprint, max_distance=max_distance_m)
        if len(hits) == 0:
            unmatched += 1
            matched.append(building)
            continue
        # Ties resolve to the earliest lane
        nearest = sidewalks[int(min(hits))]
        matched.append(replace(building, sidewalk_lane_id=nearest.id))

    if unmatched:
        logger.debug(f"{unmatched} buildings are not within {max_distance_m}m of any sidewalk")
    return matched
