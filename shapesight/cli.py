"""Command-line entry point.

    shapesight detect photo.png --threshold 100 --annotate out.png
    shapesight detect --sample star
    shapesight samples
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from shapesight.config import settings
from shapesight.engine.config import OUTLINE_SOURCES
from shapesight.engine.context import Raster
from shapesight.engine.errors import InputNotReadyError
from shapesight.engine.pipeline import detect
from shapesight.models.shapes import ShapeModel
from shapesight.render.overlay import draw_shapes
from shapesight.samples import get_sample, list_samples
from shapesight.utils.imaging import load_image

logger = logging.getLogger(__name__)

EXIT_BAD_IMAGE = 1
EXIT_NO_INPUT = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="shapesight", description="Detect shapes in raster images")
    parser.add_argument("--log-level", default=settings.shapesight_log_level)
    sub = parser.add_subparsers(dest="command", required=True)

    det = sub.add_parser("detect", help="Detect shapes and print them as JSON")
    source = det.add_mutually_exclusive_group(required=True)
    source.add_argument("image", nargs="?", help="Path to an image file")
    source.add_argument("--sample", choices=list_samples(), help="Use a built-in sample instead")
    det.add_argument("--threshold", type=int, default=None)
    det.add_argument("--outline-source", choices=OUTLINE_SOURCES, default=None)
    det.add_argument("--annotate", metavar="OUT.png", help="Write an annotated copy of the image")

    sub.add_parser("samples", help="List built-in samples")
    return parser


def _cmd_detect(args: argparse.Namespace) -> int:
    if args.sample:
        raster = get_sample(args.sample)
    else:
        try:
            raster = Raster.from_array(load_image(args.image))
        except OSError as e:
            # Missing file, or Pillow cannot identify or decode it
            print(f"error: {e}", file=sys.stderr)
            return EXIT_BAD_IMAGE
    config = settings.detection_config().with_overrides(
        threshold=args.threshold,
        outline_source=args.outline_source,
    )
    try:
        shapes = detect(raster, config)
    except InputNotReadyError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_NO_INPUT

    payload = [ShapeModel.from_shape(s).model_dump() for s in shapes]
    print(json.dumps(payload, indent=2))

    if args.annotate:
        draw_shapes(raster, shapes).save(args.annotate)
        logger.info("Annotated image written to %s", args.annotate)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.command == "samples":
        for name in list_samples():
            print(name)
        return 0
    return _cmd_detect(args)


if __name__ == "__main__":
    sys.exit(main())
