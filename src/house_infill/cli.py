"""
Command-line interface for house infill

Usage:
    house-infill generate --input network.json --output procgen_houses.json
    house-infill generate --input overpass.json --format osm --seed 7 --summary
    house-infill fetch --lat 51.2685 --lon -0.5709 --radius 300 --output overpass.json
    house-infill sidewalks --input network.json
"""

import sys
import json
import argparse
import copy

from loguru import logger

from .config import InfillConfig, get_config
from .export import save_geojson
from .network.loader import NetworkLoader
from .network.sidewalks import SidewalkSelector
from .osm import OSMImporter
from .pipeline import BuildingInfillPipeline, make_rng
from .progress import PhaseTimer


def setup_logging(verbose: bool = False):
    """Configure logging"""
    logger.remove()
    level = "DEBUG" if verbose else "INFO"
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{message}</cyan>",
        level=level
    )


def load_inputs(path: str, fmt: str, config: InfillConfig):
    if fmt == "osm":
        return OSMImporter(config).from_file(path)
    return NetworkLoader(config).load(path)


def cmd_generate(args):
    """Generate houses along empty residential sidewalks"""
    setup_logging(args.verbose)
    config = copy.deepcopy(get_config())
    if args.sample_midpoints:
        config.placement.sample_edge_midpoints = True
    seed = args.seed if args.seed is not None else config.seed
    output_path = args.output or config.output_path

    try:
        network, basemap = load_inputs(args.input, args.format, config)
        pipeline = BuildingInfillPipeline(config)
        result = pipeline.run(network, basemap, rng=make_rng(seed), timer=PhaseTimer(show_progress=True))
        save_geojson(result, network, output_path)
    except Exception as e:
        logger.error(f"Failed to generate houses: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1

    logger.info(f"✓ Generated {result.count:,} houses")
    logger.info(f"  Wrote results to {output_path}")

    if args.summary:
        summary = dict(result.stats)
        summary["seed"] = seed
        summary["output"] = output_path
        print(json.dumps(summary, indent=2))
    return 0


def cmd_fetch(args):
    """Download OSM data around a point"""
    setup_logging(args.verbose)
    try:
        data = OSMImporter(get_config(), cache_dir=args.cache_dir).fetch(args.lat, args.lon, args.radius)
        with open(args.output, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False)
    except Exception as e:
        logger.error(f"Failed to fetch OSM data: {e}")
        return 1

    logger.info(f"✓ Saved {len(data.get('elements', []))} elements to {args.output}")
    return 0


def cmd_sidewalks(args):
    """List empty residential sidewalks"""
    setup_logging(args.verbose)
    config = get_config()
    try:
        network, _ = load_inputs(args.input, args.format, config)
    except Exception as e:
        logger.error(f"Failed to load {args.input}: {e}")
        return 1

    for lane_id in SidewalkSelector(config.network).select(network):
        lane = network.get_lane(lane_id)
        print(f"{lane_id}\t{lane.road_id}\t{lane.length:.1f}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Procedurally generate houses along residential roads without buildings",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  house-infill generate --input network.json
  house-infill generate --input overpass.json --format osm --seed 7 --summary
  house-infill fetch --lat 51.268535 --lon -0.570979 --output overpass.json
        """
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    gen = subparsers.add_parser("generate", help="Generate houses")
    gen.add_argument("--input", "-i", required=True, help="Network file")
    gen.add_argument("--format", "-f", choices=["native", "osm"], default="native",
                     help="Input format (default: native)")
    gen.add_argument("--output", "-o", help="GeoJSON output path (default: procgen_houses.json)")
    gen.add_argument("--seed", type=int, help="Random seed (default from config)")
    gen.add_argument("--sample-midpoints", action="store_true",
                     help="Also test long-edge midpoints against the basemap")
    gen.add_argument("--summary", action="store_true", help="Print summary JSON to stdout")
    gen.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    gen.set_defaults(func=cmd_generate)

    fetch = subparsers.add_parser("fetch", help="Download OSM data from Overpass")
    fetch.add_argument("--lat", type=float, required=True, help="Latitude")
    fetch.add_argument("--lon", type=float, required=True, help="Longitude")
    fetch.add_argument("--radius", type=float, default=300.0, help="Radius in meters (default: 300)")
    fetch.add_argument("--output", "-o", required=True, help="Where to write the Overpass JSON")
    fetch.add_argument("--cache-dir", help="Cache directory for raw responses")
    fetch.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    fetch.set_defaults(func=cmd_fetch)

    sidewalks = subparsers.add_parser("sidewalks", help="List empty residential sidewalks")
    sidewalks.add_argument("--input", "-i", required=True, help="Network file")
    sidewalks.add_argument("--format", "-f", choices=["native", "osm"], default="native")
    sidewalks.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    sidewalks.set_defaults(func=cmd_sidewalks)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
