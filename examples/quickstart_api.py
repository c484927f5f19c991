#!/usr/bin/env python3
"""Quickstart example using the high-level encode/decode API.

This example demonstrates the simplest way to use the package:
- Load an image (or generate a random RGBA one)
- Encode it to a .shivanosh container with encode()
- Decode it back with decode() and check the round trip is exact
"""

from __future__ import annotations

import argparse
from pathlib import Path

import numpy as np

from shivanosh import Raster, decode, encode, get_compression_ratio, get_container_info
from shivanosh.imaging import load_raster, save_raster


def main() -> None:
    parser = argparse.ArgumentParser(description="Quickstart API example")
    parser.add_argument(
        "--input",
        type=Path,
        default=None,
        help="Input image path (random image if omitted)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("examples/reconstruction_api.png"),
        help="Output path for the decoded image",
    )
    parser.add_argument(
        "--size",
        type=int,
        default=256,
        help="Random image size if no input image is given",
    )
    args = parser.parse_args()

    if args.input is not None:
        raster = load_raster(args.input)
        print(f"Loaded image: {args.input}")
    else:
        print("No input image given; generating random image instead")
        raster = Raster.from_array(
            np.random.randint(0, 256, (args.size, args.size, 4), dtype=np.uint8)
        )

    print("Encoding...")
    data = encode(raster)

    info = get_container_info(data)
    ratio = get_compression_ratio(raster, data)
    print(f"Container size: {len(data)} bytes")
    print(f"Compression ratio: {ratio:.2f}x")
    print(f"Header: {info['width']}x{info['height']}")

    print("Decoding...")
    decoded = decode(data)
    print(f"Lossless round trip: {decoded == raster}")

    save_raster(decoded, args.output)
    print(f"Decoded image saved to: {args.output}")


if __name__ == "__main__":
    main()
