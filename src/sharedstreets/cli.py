# cli.py
"""
Usage:
    sharedstreets build roads.geojson [--config batch.json] [--log-level DEBUG]
    sharedstreets build - < roads.geojson
    sharedstreets id geometry '[[110, 45], [115, 50], [120, 55]]'
    sharedstreets id intersection '[110, 45]'
"""

import argparse
import json
import sys
from pathlib import Path

from pydantic import ValidationError

from sharedstreets.app.batch import build_collection
from sharedstreets.app.builders import geometry_id, intersection_id
from sharedstreets.config.models import BatchModel
from sharedstreets.errors import SharedStreetsError
from sharedstreets.io.build_logging import BuildLogging
from sharedstreets.io.recorder import JsonlSink, Recorder


def _load_json(path: str):
    if path == "-":
        return json.load(sys.stdin)
    return json.loads(Path(path).read_text(encoding="utf-8"))


def cmd_build(args) -> int:
    cfg = BatchModel.model_validate(_load_json(args.config)) if args.config else BatchModel()
    if args.log_level or args.debug:
        log = cfg.log.model_copy(
            update={"level": args.log_level or cfg.log.level, "debug": args.debug or cfg.log.debug}
        )
        cfg = cfg.model_copy(update={"log": log})

    hooks = BuildLogging(
        run_id=cfg.run_id,
        level=cfg.log.level,
        debug=cfg.log.debug,
        sample_every=cfg.log.sample_every,
    )
    result = build_collection(_load_json(args.input), cfg, hooks=hooks)
    Recorder(JsonlSink(sys.stdout)).emit_all(result.records())
    return 0


def cmd_id(args) -> int:
    coords = json.loads(args.coords)
    fn = geometry_id if args.kind == "geometry" else intersection_id
    print(fn(coords))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sharedstreets", description="Content-addressed SharedStreets ids and references"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_build = sub.add_parser("build", help="Build every record of a GeoJSON FeatureCollection")
    p_build.add_argument("input", help="GeoJSON file, or - for stdin")
    p_build.add_argument("--config", help="JSON file with batch settings")
    p_build.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    p_build.add_argument("--debug", action="store_true", help="Log every built feature")
    p_build.set_defaults(func=cmd_build)

    p_id = sub.add_parser("id", help="Print the id of a geometry or intersection")
    p_id.add_argument("kind", choices=["geometry", "intersection"])
    p_id.add_argument("coords", help="JSON coordinates, e.g. '[110, 45]'")
    p_id.set_defaults(func=cmd_id)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except (SharedStreetsError, ValidationError, json.JSONDecodeError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
