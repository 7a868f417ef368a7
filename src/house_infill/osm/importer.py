"""
OSM importer

Orchestrates the OSM components into a RoadNetwork and Basemap:
fetch (or read) Overpass JSON, parse ways, build roads, derive sidewalks,
match buildings to sidewalks, collect obstacle areas.
"""

import json
from typing import Any, Dict, Optional, Tuple

from loguru import logger

from ..basemap import Basemap
from ..config import InfillConfig, get_config
from ..geometry_utils import GeometryUtils
from ..network.models import GPSReference, RoadNetwork
from ..network.sidewalks import SidewalkBuilder, match_buildings_to_sidewalks
from .api_client import OverpassAPIClient
from .buildings import BuildingProcessor
from .cache import OSMCache
from .features import FeatureProcessor
from .parser import OSMResponseParser
from .roads import RoadProcessor


class OSMImporter:
    """
    Build the generation inputs from OpenStreetMap data

    Usage:
        importer = OSMImporter(cache_dir="cache")
        network, basemap = importer.from_file("overpass.json")
        network, basemap = importer.from_data(importer.fetch(51.5, -0.12, 300))
    """

    def __init__(self, config: Optional[InfillConfig] = None, cache_dir: Optional[str] = None):
        self.config = config or get_config()
        self.cache = OSMCache(cache_dir)
        self.parser = OSMResponseParser()
        self.road_processor = RoadProcessor(self.config.network)
        self.building_processor = BuildingProcessor()
        self.feature_processor = FeatureProcessor(self.config.network)
        self.sidewalk_builder = SidewalkBuilder(self.config.network)

    def fetch(self, lat: float, lon: float, radius_m: float = 300) -> Dict[str, Any]:
        """Raw Overpass response for everything generation needs around a point"""
        cache_path = self.cache.get_cache_path(lat, lon, radius_m)
        if cache_path:
            cached = self.cache.load(cache_path)
            if cached:
                return cached

        timeout = self.config.api.overpass_timeout
        logger.info(f"Fetching OSM features within {radius_m}m of ({lat}, {lon})")
        query = f"""
        [out:json][timeout:{timeout}];
        (
            way["highway"](around:{radius_m},{lat},{lon});
            way["building"](around:{radius_m},{lat},{lon});
            way["natural"](around:{radius_m},{lat},{lon});
            way["landuse"](around:{radius_m},{lat},{lon});
            way["leisure"](around:{radius_m},{lat},{lon});
            way["amenity"="parking"](around:{radius_m},{lat},{lon});
        );
        out geom;
        """
        data = OverpassAPIClient(self.config.api).query(query)
        if cache_path:
            self.cache.save(cache_path, data)
        return data

    def from_file(self, path: str) -> Tuple[RoadNetwork, Basemap]:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        logger.info(f"Loaded Overpass data: {path}")
        return self.from_data(data)

    def from_data(
        self,
        data: Dict[str, Any],
        reference: Optional[GPSReference] = None
    ) -> Tuple[RoadNetwork, Basemap]:
        nodes, ways = self.parser.parse_elements(data)
        if reference is None:
            reference = self._center_of(ways)
        if reference is None:
            logger.warning("Overpass data has no ways; nothing to import")
            return RoadNetwork(), Basemap()

        def project(coords):
            return GeometryUtils.degrees_to_local(coords, reference.lon, reference.lat)

        roads = self.road_processor.parse_roads(ways, project)
        network = RoadNetwork(roads=roads, gps_reference=reference)
        self.sidewalk_builder.build_all(network)

        buildings = self.building_processor.parse_buildings(ways, project)
        network.buildings = match_buildings_to_sidewalks(
            buildings, network.lanes, self.config.network.max_building_to_sidewalk_m
        )
        areas = self.feature_processor.parse_areas(ways, project)

        logger.info(
            f"Imported {len(nodes)} nodes, {len(ways)} ways: {len(roads)} roads, "
            f"{len(network.lanes)} sidewalks, {len(buildings)} buildings, {len(areas)} areas"
        )
        return network, Basemap.from_network(network, areas, lane_width_m=self.config.network.sidewalk_width_m)

    @staticmethod
    def _center_of(ways) -> Optional[GPSReference]:
        lons, lats = [], []
        for way in ways:
            for lon, lat in way.get_coordinates():
                lons.append(lon)
                lats.append(lat)
        if not lons:
            return None
        return GPSReference(
            lon=(min(lons) + max(lons)) / 2.0,
            lat=(min(lats) + max(lats)) / 2.0,
        )
