"""
OSM data models

Data classes for representing OSM nodes and ways
"""

from typing import List, Dict, Optional
from dataclasses import dataclass, field


@dataclass
class OSMNode:
    """Represents an OSM node (point)"""
    id: int
    lat: float
    lon: float
    tags: Dict[str, str] = field(default_factory=dict)


@dataclass
class OSMWay:
    """Represents an OSM way (line or polygon)"""
    id: int
    nodes: List[OSMNode]
    tags: Dict[str, str]
    geometry: Optional[List[List[float]]] = None  # Direct geometry from Overpass

    def get_coordinates(self) -> List[List[float]]:
        """Get coordinates as [lon, lat] list"""
        if self.geometry:
            return [list(c) for c in self.geometry]
        return [[n.lon, n.lat] for n in self.nodes]

    def is_closed(self) -> bool:
        coords = self.get_coordinates()
        return len(coords) >= 4 and coords[0] == coords[-1]
