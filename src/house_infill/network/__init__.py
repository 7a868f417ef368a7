"""
Road network module

- Models: Road, Lane, ExistingBuilding, RoadNetwork
- Sidewalks: eligible sidewalk selection, sidewalk derivation, building matching
- Loader: native JSON network files
"""

from .models import Road, Lane, ExistingBuilding, GPSReference, RoadNetwork
from .sidewalks import SidewalkSelector, SidewalkBuilder, match_buildings_to_sidewalks

__all__ = [
    "Road",
    "Lane",
    "ExistingBuilding",
    "GPSReference",
    "RoadNetwork",
    "SidewalkSelector",
    "SidewalkBuilder",
    "match_buildings_to_sidewalks",
]
