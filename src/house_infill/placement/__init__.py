"""
Placement modules for house infill
"""

from .placer import Candidate, CandidatePlacer
from .pruning import SelfOverlapPruner
from .basemap_filter import BasemapOverlapFilter

__all__ = [
    "Candidate",
    "CandidatePlacer",
    "SelfOverlapPruner",
    "BasemapOverlapFilter",
]
