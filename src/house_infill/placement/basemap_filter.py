"""
Basemap overlap filter

Obstacle shapes may be drawn as thin outlines rather than filled areas, so
polygon intersection is not reliable. Instead every sample point of the
candidate is tested against every nearby obstacle.
"""

from typing import List, Optional

from loguru import logger

from ..basemap import Basemap
from ..config import PlacementConfig, get_config
from ..geometry_utils import GeometryUtils
from ..progress import PhaseTimer
from .placer import Candidate


class BasemapOverlapFilter:
    """Drops candidates with a corner (or long-edge midpoint) inside an obstacle"""

    def __init__(self, placement_config: Optional[PlacementConfig] = None):
        self.config = placement_config or get_config().placement

    def sample_points(self, candidate: Candidate):
        return GeometryUtils.boundary_sample_points(
            candidate.polygon,
            include_midpoints=self.config.sample_edge_midpoints,
            min_edge_length=self.config.midpoint_min_edge_m,
        )

    def collides(self, candidate: Candidate, basemap: Basemap) -> bool:
        points = self.sample_points(candidate)
        for obstacle in basemap.query(candidate.bounds):
            if any(obstacle.contains_point(x, y) for x, y in points):
                logger.debug(f"Candidate on {candidate.lane_id} hits {obstacle.kind} {obstacle.id}")
                return True
        return False

    def filter(
        self,
        candidates: List[Candidate],
        basemap: Basemap,
        timer: Optional[PhaseTimer] = None
    ) -> List[Candidate]:
        # Basemap queries are not thread-safe; keep this sequential
        survivors = []
        items = timer.track("prune buildings overlapping the basemap", candidates) if timer else candidates
        for candidate in items:
            if not self.collides(candidate, basemap):
                survivors.append(candidate)

        logger.info(f"Kept {len(survivors)}/{len(candidates)} candidates clear of the basemap")
        return survivors
