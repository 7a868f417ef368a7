"""
Native network file loader

Reads a JSON network document (see models.NetworkFile) into a RoadNetwork
and the matching Basemap.
"""

import json
from typing import Any, Dict, List, Optional, Tuple

from loguru import logger
from shapely.geometry import LineString, Polygon

from ..basemap import AreaObstacle, Basemap, Obstacle, OutlineObstacle
from ..config import InfillConfig, get_config
from ..geometry_utils import GeometryUtils
from ..models import NetworkFile
from .models import ExistingBuilding, GPSReference, Lane, Road, RoadNetwork
from .sidewalks import SidewalkBuilder, match_buildings_to_sidewalks


class NetworkLoader:
    """Builds a RoadNetwork and Basemap from a native network document"""

    def __init__(self, config: Optional[InfillConfig] = None):
        self.config = config or get_config()

    def load(self, path: str) -> Tuple[RoadNetwork, Basemap]:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        logger.info(f"Loaded network file: {path}")
        return self.parse(data)

    def parse(self, data: Dict[str, Any]) -> Tuple[RoadNetwork, Basemap]:
        doc = NetworkFile.model_validate(data)
        net_cfg = self.config.network

        gps = None
        if doc.gps_reference is not None:
            gps = GPSReference(lon=doc.gps_reference.lon, lat=doc.gps_reference.lat)

        def to_local(coords: List[List[float]]) -> List[Tuple[float, float]]:
            if gps is None:
                return [(c[0], c[1]) for c in coords]
            return GeometryUtils.degrees_to_local([c[:2] for c in coords], gps.lon, gps.lat)

        roads = {}
        for spec in doc.roads:
            if spec.id in roads:
                raise ValueError(f"Duplicate road id: {spec.id}")
            highway = spec.tags.get("highway", "")
            roads[spec.id] = Road(
                id=spec.id,
                tags=dict(spec.tags),
                centerline=LineString(to_local(spec.centerline)),
                width_m=spec.width_m or net_cfg.road_widths.get(highway, net_cfg.default_road_width_m),
            )

        network = RoadNetwork(roads=roads, gps_reference=gps)

        if doc.lanes is None:
            SidewalkBuilder(net_cfg).build_all(network)
        else:
            for spec in doc.lanes:
                if spec.road_id not in roads:
                    raise ValueError(f"Lane {spec.id} references unknown road {spec.road_id}")
                network.add_lane(Lane(
                    id=spec.id,
                    road_id=spec.road_id,
                    center=LineString(to_local(spec.center)),
                    kind=spec.kind,
                ))

        buildings = []
        for spec in doc.buildings:
            footprint = None
            if spec.footprint and len(spec.footprint) >= 3:
                footprint = Polygon(to_local(spec.footprint))
            if spec.sidewalk is not None:
                try:
                    network.get_lane(spec.sidewalk)
                except KeyError:
                    logger.warning(f"Building {spec.id} fronts unknown lane {spec.sidewalk}")
            buildings.append(ExistingBuilding(
                id=spec.id,
                sidewalk_lane_id=spec.sidewalk,
                footprint=footprint,
            ))
        network.buildings = match_buildings_to_sidewalks(
            buildings, network.lanes, net_cfg.max_building_to_sidewalk_m
        )

        areas: List[Obstacle] = []
        for spec in doc.areas:
            polygon = Polygon(to_local(spec.polygon))
            if spec.outline_only:
                areas.append(OutlineObstacle(spec.id, spec.kind, polygon))
            else:
                areas.append(AreaObstacle(spec.id, spec.kind, polygon))

        logger.info(
            f"Network: {len(network.roads)} roads, {len(network.lanes)} lanes, "
            f"{len(network.buildings)} buildings, {len(areas)} areas"
        )
        return network, Basemap.from_network(network, areas, lane_width_m=net_cfg.sidewalk_width_m)
