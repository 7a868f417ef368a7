import numpy as np
import pytest
from shapely.geometry import LineString

from house_infill.config import PlacementConfig, SamplingRange
from house_infill.errors import InvalidRangeError, MalformedGeometryError
from house_infill.network.models import Lane
from house_infill.placement.placer import CandidatePlacer

from conftest import ScriptedRng


def _lane(coords, lane_id="l1"):
    return Lane(id=lane_id, road_id="r1", center=LineString(coords))


def test_place_with_scripted_draws():
    # offset, then (width, height, gap) per house
    rng = ScriptedRng([2.0, 10.0, 8.0, 3.0, 6.0, 12.0, 2.0, 7.0, 7.0, 3.0])
    lane = _lane([(0, -3.5), (30, -3.5)])

    candidates = CandidatePlacer(PlacementConfig()).place(lane, rng)

    assert len(candidates) == 3
    assert [c.dist_along for c in candidates] == pytest.approx([2.0, 15.0, 29.0])
    assert rng.values == []

    first = candidates[0]
    assert (first.width, first.height) == (10.0, 8.0)
    # center = sidewalk point pushed 10 + 8/2 away from the road
    assert first.polygon.bounds == pytest.approx((-3.0, -21.5, 7.0, -13.5))
    assert first.lane_id == "l1"


def test_draws_come_from_configured_ranges():
    rng = ScriptedRng([2.0, 10.0, 8.0, 3.0])
    CandidatePlacer(PlacementConfig()).place(_lane([(0, 0), (5, 0)]), rng)
    assert rng.calls == [(1.0, 5.0), (6.0, 14.0), (6.0, 14.0), (2.0, 4.0)]


@pytest.mark.parametrize("seed", range(10))
def test_setback_constant_regardless_of_height(seed):
    lane = _lane([(0, 0), (60, 0), (60, 80), (140, 140)])
    config = PlacementConfig()
    candidates = CandidatePlacer(config).place(lane, np.random.default_rng(seed))
    assert candidates
    for c in candidates:
        assert c.polygon.distance(c.sidewalk_point) == pytest.approx(config.base_setback_m, abs=1e-6)


@pytest.mark.parametrize("seed", range(10))
def test_footprints_are_sampled_rectangles(seed):
    lane = _lane([(0, 0), (200, 0)])
    for c in CandidatePlacer().place(lane, np.random.default_rng(seed)):
        assert 6.0 <= c.width < 14.0
        assert 6.0 <= c.height < 14.0
        assert c.polygon.area == pytest.approx(c.width * c.height)
        assert len(c.polygon.exterior.coords) == 5
        assert c.polygon.convex_hull.area == pytest.approx(c.polygon.area)


def test_houses_sit_right_of_travel_direction():
    lane = _lane([(0, 0), (0, 100)])  # heading north
    for c in CandidatePlacer().place(lane, np.random.default_rng(3)):
        assert c.polygon.bounds[0] > 0  # east of the sidewalk


@pytest.mark.parametrize("seed", range(20))
def test_lane_shorter_than_offset_yields_nothing(seed):
    lane = _lane([(0, 0), (0.5, 0)])
    assert CandidatePlacer().place(lane, np.random.default_rng(seed)) == []


def test_place_all_pools_in_lane_order():
    lanes = [_lane([(0, 0), (100, 0)], "a"), _lane([(0, 500), (100, 500)], "b")]
    candidates = CandidatePlacer().place_all(lanes, np.random.default_rng(5))
    lane_ids = [c.lane_id for c in candidates]
    assert lane_ids == sorted(lane_ids)
    assert {"a", "b"} == set(lane_ids)


def test_same_seed_same_candidates():
    lanes = [_lane([(0, 0), (100, 0)], "a"), _lane([(0, 50), (80, 90)], "b")]
    first = CandidatePlacer().place_all(lanes, np.random.default_rng(11))
    second = CandidatePlacer().place_all(lanes, np.random.default_rng(11))
    assert [list(c.polygon.exterior.coords) for c in first] == [list(c.polygon.exterior.coords) for c in second]


def test_invalid_range_fails_before_placing():
    with pytest.raises(InvalidRangeError):
        PlacementConfig(gap_m=SamplingRange(4.0, 2.0))


def test_malformed_lane_propagates():
    class BrokenLane:
        id = "broken"
        length = 10.0

        def dist_along(self, distance):
            raise MalformedGeometryError("no tangent here")

    with pytest.raises(MalformedGeometryError):
        CandidatePlacer().place(BrokenLane(), np.random.default_rng(0))
