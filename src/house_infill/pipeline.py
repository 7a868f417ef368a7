"""
Main pipeline for procedurally generated houses

Fills residential roads that have no buildings with simple rectangular
houses:

  1. Select empty residential sidewalks
  2. Walk each sidewalk, placing candidate houses with a fixed setback
  3. Drop candidates that overlap each other (earlier ones win)
  4. Drop candidates that overlap the basemap (roads, parks, water, buildings)

Runs single-threaded and deterministic for a given seed.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np
from loguru import logger
from shapely.geometry import Polygon

from .basemap import Basemap
from .config import InfillConfig, get_config, validate_config
from .network.models import RoadNetwork
from .network.sidewalks import SidewalkSelector
from .placement import BasemapOverlapFilter, Candidate, CandidatePlacer, SelfOverlapPruner
from .progress import PhaseTimer


def make_rng(seed: int) -> np.random.Generator:
    """The one generator a run draws from"""
    return np.random.default_rng(seed)


@dataclass
class InfillResult:
    """Final houses plus per-stage counts"""
    buildings: List[Candidate] = field(default_factory=list)
    stats: Dict[str, int] = field(default_factory=dict)

    @property
    def polygons(self) -> List[Polygon]:
        return [b.polygon for b in self.buildings]

    @property
    def count(self) -> int:
        return len(self.buildings)


class BuildingInfillPipeline:
    """
    Usage:
        pipeline = BuildingInfillPipeline()
        result = pipeline.run(network, basemap)
        print(f"Generated {result.count} houses")
    """

    def __init__(self, config: Optional[InfillConfig] = None):
        self.config = config or get_config()
        validate_config(self.config)
        self.selector = SidewalkSelector(self.config.network)
        self.placer = CandidatePlacer(self.config.placement)
        self.pruner = SelfOverlapPruner(self.config.placement)
        self.basemap_filter = BasemapOverlapFilter(self.config.placement)

    def run(
        self,
        network: RoadNetwork,
        basemap: Optional[Basemap] = None,
        rng: Optional[np.random.Generator] = None,
        timer: Optional[PhaseTimer] = None
    ) -> InfillResult:
        """
        Args:
            network: roads, lanes and existing buildings
            basemap: obstacles to avoid; none when omitted
            rng: generator to draw from; a fresh one from config.seed when omitted
            timer: progress reporting; a default one when omitted

        Returns:
            InfillResult with the surviving houses in generation order
        """
        rng = rng if rng is not None else make_rng(self.config.seed)
        basemap = basemap if basemap is not None else Basemap()
        timer = timer or PhaseTimer()

        timer.start("initially place buildings")
        lane_ids = self.selector.select(network)
        candidates = self.placer.place_all([network.get_lane(lane_id) for lane_id in lane_ids], rng)
        timer.stop("initially place buildings")
        logger.info(f"Placed {len(candidates)} candidate houses on {len(lane_ids)} sidewalks")

        non_overlapping = self.pruner.prune(candidates, timer=timer)
        survivors = self.basemap_filter.filter(non_overlapping, basemap, timer=timer)

        result = InfillResult(
            buildings=survivors,
            stats={
                "empty_sidewalks": len(lane_ids),
                "candidates": len(candidates),
                "non_overlapping": len(non_overlapping),
                "generated": len(survivors),
            },
        )
        logger.info(f"Generated {result.count} houses")
        return result
