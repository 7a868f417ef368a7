"""
Candidate house placement along sidewalks

Walks each sidewalk with a seeded generator and drops rectangular houses at
jittered intervals, each set back a fixed distance from the sidewalk.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

from loguru import logger
from shapely.geometry import Point, Polygon

from ..config import PlacementConfig, get_config
from ..geometry_utils import GeometryUtils
from ..network.models import Lane


@dataclass(frozen=True)
class Candidate:
    """A generated house footprint and where it came from"""
    polygon: Polygon
    lane_id: str
    sidewalk_point: Point
    dist_along: float
    angle_degs: float
    width: float
    height: float

    @property
    def bounds(self):
        return self.polygon.bounds


class CandidatePlacer:
    """
    Places candidate houses along sidewalk lanes

    Usage:
        rng = numpy.random.default_rng(42)
        placer = CandidatePlacer()
        candidates = placer.place_all(lanes, rng)
    """

    def __init__(self, placement_config: Optional[PlacementConfig] = None):
        self.config = placement_config or get_config().placement

    def place(self, lane: Lane, rng) -> List[Candidate]:
        """
        Candidates along one lane

        Width runs along the sidewalk and height runs away from it. The
        setback grows with half the height so the front edge always sits
        `base_setback_m` from the sidewalk.
        """
        cfg = self.config
        candidates = []
        dist_along = cfg.initial_offset_m.sample(rng)
        while dist_along < lane.length:
            sidewalk_pt, angle = lane.dist_along(dist_along)
            width = cfg.footprint_size_m.sample(rng)
            height = cfg.footprint_size_m.sample(rng)

            setback = cfg.base_setback_m + height / 2.0
            center = GeometryUtils.project_away(sidewalk_pt, setback, angle - 90.0)

            candidates.append(Candidate(
                polygon=GeometryUtils.rectangle(width, height, angle, center),
                lane_id=lane.id,
                sidewalk_point=sidewalk_pt,
                dist_along=dist_along,
                angle_degs=angle,
                width=width,
                height=height,
            ))

            dist_along += max(width, height) + cfg.gap_m.sample(rng)

        return candidates

    def place_all(self, lanes: Iterable[Lane], rng) -> List[Candidate]:
        """Candidates for every lane, pooled in lane order"""
        pooled = []
        for lane in lanes:
            placed = self.place(lane, rng)
            logger.debug(f"Lane {lane.id} ({lane.length:.1f}m): {len(placed)} candidates")
            pooled.extend(placed)
        return pooled
