import pytest
from shapely.geometry import LineString, box

from house_infill.config import NetworkConfig
from house_infill.network.models import ExistingBuilding, Lane, Road, RoadNetwork
from house_infill.network.sidewalks import SidewalkBuilder, SidewalkSelector, match_buildings_to_sidewalks


def _network():
    roads = {
        "res": Road(id="res", tags={"highway": "residential"}, centerline=LineString([(0, 0), (50, 0)])),
        "pri": Road(id="pri", tags={"highway": "primary"}, centerline=LineString([(0, 50), (50, 50)])),
    }
    lanes = [
        Lane(id="res_a", road_id="res", center=LineString([(0, -3), (50, -3)])),
        Lane(id="res_drive", road_id="res", center=LineString([(0, -1), (50, -1)]), kind="driving"),
        Lane(id="pri_a", road_id="pri", center=LineString([(0, 47), (50, 47)])),
        Lane(id="res_b", road_id="res", center=LineString([(50, 3), (0, 3)])),
        Lane(id="res_c", road_id="res", center=LineString([(0, 6), (50, 6)])),
    ]
    buildings = [ExistingBuilding(id="b1", sidewalk_lane_id="res_b")]
    return RoadNetwork(roads=roads, lanes=lanes, buildings=buildings)


def test_select_filters_and_keeps_lane_order():
    selected = SidewalkSelector(NetworkConfig()).select(_network())
    # not driving lanes, not primary roads, not sidewalks that already have buildings
    assert selected == ["res_a", "res_c"]


def test_select_is_read_only():
    network = _network()
    SidewalkSelector().select(network)
    assert [lane.id for lane in network.lanes] == ["res_a", "res_drive", "pri_a", "res_b", "res_c"]
    assert network.buildings[0].sidewalk_lane_id == "res_b"


def test_select_custom_residential_tag():
    config = NetworkConfig(residential_tag=("highway", "primary"))
    assert SidewalkSelector(config).select(_network()) == ["pri_a"]


def test_buildings_without_frontage_block_nothing():
    network = _network()
    network.buildings.append(ExistingBuilding(id="b2"))
    assert SidewalkSelector().select(network) == ["res_a", "res_c"]


@pytest.mark.parametrize("tags, sides", [
    ({"highway": "residential"}, ["right", "left"]),
    ({"highway": "residential", "sidewalk": "no"}, []),
    ({"highway": "residential", "sidewalk": "separate"}, []),
    ({"highway": "service"}, []),
    ({"highway": "service", "sidewalk": "both"}, ["right", "left"]),
    ({"highway": "residential", "sidewalk": "left"}, ["left"]),
    ({"highway": "residential", "sidewalk": "right"}, ["right"]),
    ({"highway": "residential", "sidewalk": "maybe"}, []),
])
def test_sidewalk_sides(tags, sides):
    road = Road(id="r", tags=tags, centerline=LineString([(0, 0), (10, 0)]))
    assert SidewalkBuilder(NetworkConfig()).sides_for(road) == sides


def test_build_sidewalks_face_away_from_road():
    road = Road(id="r1", tags={"highway": "residential"}, centerline=LineString([(0, 0), (100, 0)]), width_m=5.0)
    lanes = SidewalkBuilder(NetworkConfig(sidewalk_width_m=2.0)).build(road)
    assert [lane.id for lane in lanes] == ["r1_sidewalk_right", "r1_sidewalk_left"]

    right, left = lanes
    # Offset by half the road plus half the sidewalk
    assert right.center.coords[0] == pytest.approx((0.0, -3.5))
    assert right.center.coords[-1] == pytest.approx((100.0, -3.5))
    assert left.center.coords[0] == pytest.approx((100.0, 3.5))
    assert left.center.coords[-1] == pytest.approx((0.0, 3.5))
    assert all(lane.road_id == "r1" and lane.is_sidewalk for lane in lanes)


def test_build_all_adds_lanes():
    network = RoadNetwork(roads={
        "a": Road(id="a", tags={"highway": "residential"}, centerline=LineString([(0, 0), (10, 0)])),
        "b": Road(id="b", tags={"highway": "service"}, centerline=LineString([(0, 20), (10, 20)])),
    })
    assert SidewalkBuilder().build_all(network) == 2
    assert network.get_lane("a_sidewalk_left").road_id == "a"


def test_match_buildings_to_nearest_sidewalk():
    lanes = [
        Lane(id="south", road_id="r", center=LineString([(0, -3.5), (100, -3.5)])),
        Lane(id="north", road_id="r", center=LineString([(100, 3.5), (0, 3.5)])),
    ]
    buildings = [
        ExistingBuilding(id="near_north", footprint=box(40, 10, 50, 20)),
        ExistingBuilding(id="near_south", footprint=box(40, -20, 50, -10)),
        ExistingBuilding(id="far", footprint=box(40, 500, 50, 510)),
        ExistingBuilding(id="given", sidewalk_lane_id="south", footprint=box(40, 10, 50, 20)),
    ]
    matched = match_buildings_to_sidewalks(buildings, lanes, max_distance_m=100.0)
    assert [b.sidewalk_lane_id for b in matched] == ["north", "south", None, "south"]
    # Input is left untouched
    assert buildings[0].sidewalk_lane_id is None
