"""
OSM response parser

Parses Overpass API responses into OSMNode and OSMWay objects
"""

from typing import Dict, Any, Tuple, List

from loguru import logger

from .models import OSMNode, OSMWay


class OSMResponseParser:
    """Parses Overpass API responses"""

    @staticmethod
    def parse_elements(data: Dict[str, Any]) -> Tuple[Dict[int, OSMNode], List[OSMWay]]:
        """
        Parse Overpass response into nodes and ways

        Handles both 'out body' (node references) and 'out geom' (direct geometry) formats.
        Node elements must come before the ways that reference them, as Overpass emits them.

        Args:
            data: JSON response from Overpass API

        Returns:
            Tuple of (nodes dict, ways list)
        """
        nodes = {}
        ways = []

        for element in data.get("elements", []):
            kind = element.get("type")
            if kind == "node":
                try:
                    nodes[element["id"]] = OSMNode(
                        id=element["id"],
                        lat=element["lat"],
                        lon=element["lon"],
                        tags=element.get("tags", {})
                    )
                except KeyError as e:
                    logger.warning(f"Skipping node without {e}: {element.get('id')}")
            elif kind == "way":
                # Overpass 'out geom' provides geometry as list of {lat, lon} objects
                geometry = None
                if "geometry" in element:
                    geometry = []
                    for node in element["geometry"]:
                        if isinstance(node, dict):
                            geometry.append([node.get("lon"), node.get("lat")])
                        elif isinstance(node, list) and len(node) >= 2:
                            geometry.append(node)

                way_nodes = []
                for node_id in element.get("nodes", []):
                    if node_id in nodes:
                        way_nodes.append(nodes[node_id])

                ways.append(OSMWay(
                    id=element["id"],
                    nodes=way_nodes,
                    tags=element.get("tags", {}),
                    geometry=geometry
                ))

        return nodes, ways
