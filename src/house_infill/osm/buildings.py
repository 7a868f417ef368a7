"""
Building-specific logic

Turns OSM building ways into existing buildings
"""

from typing import List

from loguru import logger
from shapely.geometry import Polygon

from ..network.models import ExistingBuilding
from .models import OSMWay
from .roads import Projector


class BuildingProcessor:
    """Processes buildings from OSM data"""

    def parse_buildings(self, ways: List[OSMWay], project: Projector) -> List[ExistingBuilding]:
        """
        Parse building ways into footprints

        Frontage is not known yet; buildings are matched to sidewalks once
        the sidewalks exist.
        """
        buildings = []
        skipped = 0
        for way in ways:
            if "building" not in way.tags:
                continue
            coords = way.get_coordinates()
            # Skip point buildings (less than 3 unique points)
            if len(set((round(c[0], 8), round(c[1], 8)) for c in coords)) < 3:
                skipped += 1
                continue
            if coords[0] != coords[-1]:
                coords.append(coords[0])

            footprint = Polygon(project(coords))
            if not footprint.is_valid:
                footprint = footprint.buffer(0)
            if footprint.is_empty or footprint.geom_type != "Polygon":
                skipped += 1
                continue

            buildings.append(ExistingBuilding(
                id=str(way.id),
                footprint=footprint,
            ))

        if skipped:
            logger.warning(f"Skipped {skipped} degenerate building ways")
        return buildings
