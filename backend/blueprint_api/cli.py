"""Blueprint renderer - command line

Normalize a generated room list and write it out as SVG.

Usage:
    blueprint-render --input rooms.json --output plan.svg
    blueprint-render --prompt "Two bedroom flat with open kitchen" --png plan.png
"""

import argparse
import asyncio
import base64
import json
import logging
import sys

from blueprint_api.config import Config
from blueprint_api.services.client import BlueprintClient, BlueprintClientError
from blueprint_api.services.preview import render_preview_base64
from blueprint_api.services.renderer import default_engine, render_normalized
from floorplan.normalizer import normalize_blueprint

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render a generated floor plan as SVG")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--input", type=str, help="Raw blueprint JSON file.")
    source.add_argument("--prompt", type=str, help="Describe the layout and fetch it from the backend.")
    parser.add_argument("--backend-url", type=str, default=Config.BACKEND_URL,
                        help="Generation service base URL.")
    parser.add_argument("--output", type=str, default=None, help="SVG output file (stdout if omitted).")
    parser.add_argument("--png", type=str, default=None, help="Also write a PNG preview here.")
    return parser


def _load_raw(args):
    if args.input:
        with open(args.input, encoding="utf-8") as f:
            return json.load(f)
    return asyncio.run(BlueprintClient(args.backend_url).generate_blueprint(args.prompt))


def main(argv=None) -> int:
    logging.basicConfig(level=Config.LOG_LEVEL, format=Config.LOG_FORMAT)
    args = build_parser().parse_args(argv)

    try:
        raw = _load_raw(args)
    except (OSError, json.JSONDecodeError, BlueprintClientError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    engine = default_engine.ensure_initialized()
    blueprint = normalize_blueprint(raw)
    if blueprint.repaired:
        logger.warning("Input layout overlapped or was disconnected; rooms were re-laid out on a grid")
    svg = render_normalized(blueprint, engine)

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(svg)
    else:
        print(svg)

    if args.png:
        with open(args.png, "wb") as f:
            f.write(base64.b64decode(render_preview_base64(blueprint, engine=engine)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
