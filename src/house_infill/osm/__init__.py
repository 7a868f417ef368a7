"""
OpenStreetMap import module

Separate components for:
- API client: Overpass API communication
- Cache: on-disk copies of raw responses
- Models / Parser: OSMNode, OSMWay from Overpass JSON
- Roads, Buildings, Features: way classification
- Importer: builds the RoadNetwork and Basemap
"""

from .models import OSMNode, OSMWay
from .importer import OSMImporter

__all__ = [
    "OSMNode",
    "OSMWay",
    "OSMImporter",
]
