"""
Self-overlap pruning

Earlier candidates always win: a candidate is kept only if it does not hit
anything accepted before it.
"""

from typing import List, Optional

from loguru import logger
from rtree import index as rtree_index

from ..config import PlacementConfig, get_config
from ..geometry_utils import GeometryUtils
from ..progress import PhaseTimer
from .placer import Candidate


class SelfOverlapPruner:
    """Drops candidates that overlap an earlier accepted candidate"""

    def __init__(self, placement_config: Optional[PlacementConfig] = None):
        self.config = placement_config or get_config().placement

    def prune(
        self,
        candidates: List[Candidate],
        timer: Optional[PhaseTimer] = None
    ) -> List[Candidate]:
        """
        Args:
            candidates: candidates in generation order
            timer: optional progress reporting

        Returns:
            Accepted candidates, in generation order
        """
        # The R-tree holds handles into `accepted`, never geometry
        accepted: List[Candidate] = []
        idx = rtree_index.Index()

        items = timer.track("prune buildings overlapping each other", candidates) if timer else candidates
        for candidate in items:
            search = GeometryUtils.expand_bounds(candidate.bounds, self.config.overlap_buffer_m)
            if any(
                candidate.polygon.intersects(accepted[handle].polygon)
                for handle in sorted(idx.intersection(search))
            ):
                continue
            idx.insert(len(accepted), candidate.bounds)
            accepted.append(candidate)

        logger.info(f"Kept {len(accepted)}/{len(candidates)} candidates after self-overlap pruning")
        return accepted
