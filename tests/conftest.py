import pytest
from shapely.geometry import LineString, Point, Polygon

from house_infill.network.models import ExistingBuilding, Lane, Road, RoadNetwork
from house_infill.placement.placer import Candidate


class ScriptedRng:
    """Stands in for numpy's Generator, returning preset uniform draws"""

    def __init__(self, values):
        self.values = list(values)
        self.calls = []

    def uniform(self, low, high):
        self.calls.append((low, high))
        return self.values.pop(0)


def straight_network(length=100.0, highway="residential", buildings=None):
    """One east-running road with a sidewalk 3.5m to its south"""
    road = Road(
        id="r1",
        tags={"highway": highway},
        centerline=LineString([(0, 0), (length, 0)]),
        width_m=5.0,
    )
    lane = Lane(
        id="r1_sidewalk",
        road_id="r1",
        center=LineString([(0, -3.5), (length, -3.5)]),
    )
    return RoadNetwork(roads={"r1": road}, lanes=[lane], buildings=list(buildings or []))


def make_candidate(polygon: Polygon, lane_id: str = "l1") -> Candidate:
    minx, miny, maxx, maxy = polygon.bounds
    return Candidate(
        polygon=polygon,
        lane_id=lane_id,
        sidewalk_point=Point(minx, maxy),
        dist_along=0.0,
        angle_degs=0.0,
        width=maxx - minx,
        height=maxy - miny,
    )


@pytest.fixture
def network():
    return straight_network()


@pytest.fixture
def fronted_network():
    return straight_network(buildings=[ExistingBuilding(id="b1", sidewalk_lane_id="r1_sidewalk")])
