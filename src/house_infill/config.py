"""
Configuration settings for house infill generation
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from .errors import InvalidRangeError


@dataclass(frozen=True)
class SamplingRange:
    """Half-open numeric range [low, high) sampled uniformly"""
    low: float
    high: float

    def __post_init__(self):
        if not self.high > self.low:
            raise InvalidRangeError(
                f"Sampling range must have high > low, got [{self.low}, {self.high})"
            )

    def sample(self, rng) -> float:
        """Draw one value from an explicit numpy Generator"""
        return float(rng.uniform(self.low, self.high))


@dataclass
class PlacementConfig:
    """Candidate placement and pruning parameters (meters)"""
    # Where the first house goes along an empty sidewalk
    initial_offset_m: SamplingRange = field(default_factory=lambda: SamplingRange(1.0, 5.0))
    # Width and height are drawn independently from this range
    footprint_size_m: SamplingRange = field(default_factory=lambda: SamplingRange(6.0, 14.0))
    # Extra spacing after each house
    gap_m: SamplingRange = field(default_factory=lambda: SamplingRange(2.0, 4.0))

    # Front edge of every house sits this far from the sidewalk
    base_setback_m: float = 10.0

    # Heuristics, tune freely
    overlap_buffer_m: float = 1.0
    sample_edge_midpoints: bool = False
    midpoint_min_edge_m: float = 10.0


@dataclass
class NetworkConfig:
    """Road network interpretation"""
    residential_tag: Tuple[str, str] = ("highway", "residential")

    sidewalk_width_m: float = 2.0

    # Highway types that get sidewalks on both sides when untagged
    default_sidewalk_highways: List[str] = field(default_factory=lambda: [
        "primary",
        "secondary",
        "tertiary",
        "unclassified",
        "residential",
        "living_street",
    ])

    # Highway types that are not drivable roads
    non_road_highways: List[str] = field(default_factory=lambda: [
        "footway",
        "path",
        "cycleway",
        "steps",
        "pedestrian",
        "bridleway",
        "corridor",
        "proposed",
        "construction",
    ])

    # Buildings farther than this from every sidewalk front nothing
    max_building_to_sidewalk_m: float = 100.0

    # OSM area values that block generated houses
    obstacle_area_types: List[str] = field(default_factory=lambda: [
        "water",
        "basin",
        "reservoir",
        "river",
        "park",
        "forest",
        "wood",
        "grass",
        "meadow",
        "cemetery",
        "parking",
        "playground",
        "pitch",
    ])

    # Road width estimates by type (meters)
    road_widths: Dict[str, float] = field(default_factory=lambda: {
        "motorway": 12.0,
        "trunk": 10.0,
        "primary": 8.0,
        "secondary": 7.0,
        "tertiary": 6.0,
        "unclassified": 5.0,
        "residential": 5.0,
        "living_street": 4.0,
        "service": 3.5,
    })
    default_road_width_m: float = 5.0


@dataclass
class APIConfig:
    """Overpass API configuration"""
    overpass_url: str = "https://overpass-api.de/api/interpreter"
    overpass_timeout: int = 90

    request_timeout: int = 30
    max_retries: int = 3
    retry_delay: float = 5.0

    user_agent: str = "HouseInfill/1.0"


@dataclass
class InfillConfig:
    """Top-level configuration"""
    seed: int = 42
    output_path: str = "procgen_houses.json"

    placement: PlacementConfig = field(default_factory=PlacementConfig)
    network: NetworkConfig = field(default_factory=NetworkConfig)
    api: APIConfig = field(default_factory=APIConfig)


# Global config instance
config = InfillConfig()


def get_config() -> InfillConfig:
    """Get global configuration"""
    return config


def validate_config(config: InfillConfig) -> None:
    """
    Validate configuration values.

    Sampling ranges validate themselves on construction and raise
    InvalidRangeError; everything else is collected and raised together
    as a ValueError.
    """
    errors = []
    placement = config.placement

    ranges_ok = True
    for name in ("initial_offset_m", "footprint_size_m", "gap_m"):
        value = getattr(placement, name, None)
        if not isinstance(value, SamplingRange):
            errors.append(f"placement.{name} must be a SamplingRange, got {value!r}")
            ranges_ok = False

    if ranges_ok:
        if placement.footprint_size_m.low <= 0:
            errors.append(f"placement.footprint_size_m must be positive, got {placement.footprint_size_m}")
        if placement.gap_m.low < 0:
            errors.append(f"placement.gap_m must not be negative, got {placement.gap_m}")
    if placement.base_setback_m < 0:
        errors.append(f"placement.base_setback_m must not be negative, got {placement.base_setback_m}")
    if placement.overlap_buffer_m < 0:
        errors.append(f"placement.overlap_buffer_m must not be negative, got {placement.overlap_buffer_m}")
    if placement.midpoint_min_edge_m <= 0:
        errors.append(f"placement.midpoint_min_edge_m must be positive, got {placement.midpoint_min_edge_m}")

    network = config.network
    if len(network.residential_tag) != 2:
        errors.append("network.residential_tag must be a (key, value) pair")
    if network.sidewalk_width_m <= 0:
        errors.append(f"network.sidewalk_width_m must be positive, got {network.sidewalk_width_m}")
    if network.max_building_to_sidewalk_m <= 0:
        errors.append(
            f"network.max_building_to_sidewalk_m must be positive, got {network.max_building_to_sidewalk_m}"
        )

    if not config.api.overpass_url:
        errors.append("api.overpass_url is required but not set")
    if config.api.max_retries < 1:
        errors.append(f"api.max_retries must be at least 1, got {config.api.max_retries}")

    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ValueError(error_msg)
