"""Command-line tool: convert images to .shivanosh and view or inspect containers."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from shivanosh.api import convert_images, decode_file, get_container_info
from shivanosh.config import ShivanoshConfig, load_config
from shivanosh.core.errors import ShivanoshError
from shivanosh.imaging import raster_to_image, save_raster


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="shivanosh",
        description="Shivanosh: convert images to .shivanosh containers and view them.",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More log output (-vv for debug)")
    parser.add_argument("--config", metavar="PATH", help="Path to shivanosh.toml")
    sub = parser.add_subparsers(dest="command", required=True)

    convert = sub.add_parser("convert", help="Convert images to .shivanosh")
    convert.add_argument("paths", nargs="*", metavar="IMAGE", help="Source images (.png/.jpg/...)")
    convert.add_argument("--output-dir", metavar="DIR", help="Write containers here instead of next to the sources")
    convert.add_argument("--keep-going", action="store_true", help="Continue after a failed conversion")

    view = sub.add_parser("view", help="Decode a .shivanosh file and show or export it")
    view.add_argument("path", metavar="FILE")
    view.add_argument("--export", metavar="PATH", help="Save as a regular image instead of showing it")

    info = sub.add_parser("info", help="Print the header of a .shivanosh file")
    info.add_argument("path", metavar="FILE")
    return parser.parse_args(argv)


def _configure_logging(verbose: int, config: ShivanoshConfig) -> None:
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = getattr(logging, config.log_level)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def run_convert(args: argparse.Namespace, config: ShivanoshConfig) -> int:
    stop_on_error = False if args.keep_going else None
    report = convert_images(args.paths, stop_on_error=stop_on_error, output_dir=args.output_dir, config=config)
    for _, destination in report.converted:
        print(destination)
    print(f"Status: {report.status}")
    return 0 if report.ok else 1


def run_view(args: argparse.Namespace) -> int:
    raster = decode_file(args.path)
    if args.export:
        save_raster(raster, args.export)
        print(f"{args.path} -> {args.export} ({raster.width}x{raster.height})")
        return 0
    raster_to_image(raster).show(title=Path(args.path).name)
    return 0


def run_info(args: argparse.Namespace) -> int:
    info = get_container_info(Path(args.path).read_bytes())
    for key, value in info.items():
        print(f"{key}: {value}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    try:
        config = load_config(args.config)
    except (ShivanoshError, OSError) as exc:
        print(str(exc), file=sys.stderr)
        return 2
    _configure_logging(args.verbose, config)
    try:
        if args.command == "convert":
            return run_convert(args, config)
        if args.command == "view":
            return run_view(args)
        return run_info(args)
    except (ShivanoshError, OSError) as exc:
        print(str(exc), file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
