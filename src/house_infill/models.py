"""
Pydantic models for network input files and GeoJSON output
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field


# ============================================================
# GeoJSON Types
# ============================================================

class GeoJSONPolygon(BaseModel):
    type: Literal["Polygon"] = "Polygon"
    coordinates: List[List[List[float]]]  # [[[x, y], ...]]


class Feature(BaseModel):
    type: Literal["Feature"] = "Feature"
    geometry: GeoJSONPolygon
    properties: Dict[str, Any] = Field(default_factory=dict)


class FeatureCollection(BaseModel):
    type: Literal["FeatureCollection"] = "FeatureCollection"
    features: List[Feature] = Field(default_factory=list)


# ============================================================
# Network File Models
# ============================================================

class GPSReferenceSpec(BaseModel):
    lon: float
    lat: float


class RoadSpec(BaseModel):
    id: str
    tags: Dict[str, str] = Field(default_factory=dict)
    centerline: List[List[float]] = Field(min_length=2)
    width_m: Optional[float] = Field(default=None, gt=0)


class LaneSpec(BaseModel):
    id: str
    road_id: str
    kind: str = "sidewalk"
    center: List[List[float]] = Field(min_length=2)


class BuildingSpec(BaseModel):
    id: str
    sidewalk: Optional[str] = None
    footprint: Optional[List[List[float]]] = None


class AreaSpec(BaseModel):
    id: str
    kind: str
    polygon: List[List[float]] = Field(min_length=3)
    outline_only: bool = False


class NetworkFile(BaseModel):
    """
    Native network document

    With `gps_reference` set, every coordinate is [lon, lat]; otherwise
    coordinates are local [x, y] meters. When `lanes` is omitted,
    sidewalks are derived from the roads.
    """
    gps_reference: Optional[GPSReferenceSpec] = None
    roads: List[RoadSpec] = Field(default_factory=list)
    lanes: Optional[List[LaneSpec]] = None
    buildings: List[BuildingSpec] = Field(default_factory=list)
    areas: List[AreaSpec] = Field(default_factory=list)
