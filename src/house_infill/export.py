"""
GeoJSON export of generated houses
"""

import json
import os
from typing import Optional

from loguru import logger

from .geometry_utils import GeometryUtils
from .models import Feature, FeatureCollection, GeoJSONPolygon
from .network.models import RoadNetwork
from .pipeline import InfillResult


def to_feature_collection(result: InfillResult, network: Optional[RoadNetwork] = None) -> FeatureCollection:
    """
    One Polygon feature per house

    Coordinates are [lon, lat] when the network has a GPS reference,
    local meters otherwise.
    """
    gps = network.gps_reference if network is not None else None
    features = []
    for building in result.buildings:
        ring = [(x, y) for x, y in building.polygon.exterior.coords]
        if gps is not None:
            coords = GeometryUtils.local_to_degrees(ring, gps.lon, gps.lat)
        else:
            coords = [[x, y] for x, y in ring]
        features.append(Feature(
            geometry=GeoJSONPolygon(coordinates=[coords]),
            properties={
                "sidewalk": building.lane_id,
                "width_m": round(building.width, 2),
                "height_m": round(building.height, 2),
            },
        ))
    return FeatureCollection(features=features)


def save_geojson(result: InfillResult, network: Optional[RoadNetwork], output_path: str) -> str:
    """Write houses as a GeoJSON FeatureCollection"""
    os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
    collection = to_feature_collection(result, network)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(collection.model_dump(), f, indent=2, ensure_ascii=False)
    logger.info(f"Wrote {len(collection.features)} houses to {output_path}")
    return output_path
