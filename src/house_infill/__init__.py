"""
House infill: procedurally generated houses for residential roads that
have no buildings in the imported map data
"""

from .config import InfillConfig, PlacementConfig, NetworkConfig, SamplingRange, get_config
from .errors import InvalidRangeError, MalformedGeometryError
from .pipeline import BuildingInfillPipeline, InfillResult, make_rng

__version__ = "0.1.0"

__all__ = [
    "InfillConfig",
    "PlacementConfig",
    "NetworkConfig",
    "SamplingRange",
    "get_config",
    "InvalidRangeError",
    "MalformedGeometryError",
    "BuildingInfillPipeline",
    "InfillResult",
    "make_rng",
]
