import json

import pytest
from loguru import logger

from house_infill.cli import build_parser, main
from house_infill.config import get_config

NETWORK = {
    "roads": [
        {"id": "main", "tags": {"highway": "residential"}, "centerline": [[0, 0], [120, 0]]},
        {"id": "high", "tags": {"highway": "primary"}, "centerline": [[0, 200], [120, 200]]},
    ],
    "buildings": [
        {"id": "b1", "footprint": [[50, 10], [60, 10], [60, 20], [50, 20]]},
    ],
}


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger.remove()


@pytest.fixture
def network_file(tmp_path):
    path = tmp_path / "network.json"
    path.write_text(json.dumps(NETWORK), encoding="utf-8")
    return str(path)


def test_generate_writes_geojson_and_summary(tmp_path, network_file, capsys):
    output = str(tmp_path / "houses.json")
    code = main(["generate", "--input", network_file, "--output", output, "--seed", "3", "--summary"])
    assert code == 0

    summary = json.loads(capsys.readouterr().out)
    assert summary["seed"] == 3
    assert summary["output"] == output
    assert summary["empty_sidewalks"] == 1
    assert summary["generated"] > 0

    with open(output, encoding="utf-8") as f:
        houses = json.load(f)
    assert len(houses["features"]) == summary["generated"]
    assert {f["properties"]["sidewalk"] for f in houses["features"]} == {"main_sidewalk_right"}


def test_generate_is_repeatable(tmp_path, network_file):
    outputs = []
    for name in ("a.json", "b.json"):
        path = tmp_path / name
        assert main(["generate", "-i", network_file, "-o", str(path), "--seed", "11"]) == 0
        outputs.append(path.read_text(encoding="utf-8"))
    assert outputs[0] == outputs[1]


def test_generate_does_not_touch_global_config(tmp_path, network_file):
    main(["generate", "-i", network_file, "-o", str(tmp_path / "out.json"), "--sample-midpoints"])
    assert get_config().placement.sample_edge_midpoints is False


def test_generate_missing_input_fails(tmp_path):
    code = main(["generate", "--input", str(tmp_path / "missing.json"), "--output", str(tmp_path / "out.json")])
    assert code == 1
    assert not (tmp_path / "out.json").exists()


def test_sidewalks_lists_empty_residential_sidewalks(network_file, capsys):
    assert main(["sidewalks", "--input", network_file]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines == ["main_sidewalk_right\tmain\t120.0"]


def test_fetch_writes_overpass_json(tmp_path, monkeypatch):
    payload = {"elements": [{"type": "way", "id": 1, "tags": {}, "geometry": []}]}

    class Response:
        def raise_for_status(self):
            pass

        def json(self):
            return payload

    monkeypatch.setattr("house_infill.osm.api_client.requests.post", lambda *args, **kwargs: Response())
    output = tmp_path / "overpass.json"
    assert main(["fetch", "--lat", "51.5", "--lon", "-0.1", "--output", str(output)]) == 0
    assert json.loads(output.read_text(encoding="utf-8")) == payload


def test_no_command_prints_help(capsys):
    assert main([]) == 1
    assert "generate" in capsys.readouterr().out


def test_parser_defaults():
    args = build_parser().parse_args(["generate", "-i", "x.json"])
    assert args.format == "native"
    assert args.seed is None
    assert args.output is None
