import argparse
import logging
import os
import sys

from . import render
from .errors import QrCodeError
from .symbol import encode


def build_parser():
    parser = argparse.ArgumentParser(prog="qr-code-gen", description="Encode text into a QR code")
    parser.add_argument("data", help="data that should be encoded within the QR code")
    parser.add_argument("-e", "--err-corr", default="M", type=str.upper, choices=["L", "M", "Q", "H"],
                        help="level of error correction (default: M)")
    parser.add_argument("-v", "--version", type=int, help="override version number (1-40)")
    parser.add_argument("-m", "--mask", type=int, help="override mask number (0-7)")
    parser.add_argument("-o", "--output",
                        help="write to this file (.svg, .raw or any image format) instead of the terminal")
    parser.add_argument("-s", "--size", type=int, default=10, help="module size in pixels (default: 10)")
    parser.add_argument("-b", "--border", type=int, default=4, help="quiet zone in modules (default: 4)")
    parser.add_argument("--verbose", action="store_true", help="log the encoding steps")
    return parser


def save(symbol, filename, module_pixel_size, border):
    extension = os.path.splitext(filename)[1].lower()
    if extension == ".svg":
        render.save_svg(symbol, filename, module_pixel_size, border)
    elif extension == ".raw":
        render.save_raw_pixels(symbol, filename, module_pixel_size, border)
    else:
        render.to_image(symbol, module_pixel_size, border).save(filename)


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")

    try:
        symbol = encode(args.data, args.err_corr, version=args.version, mask=args.mask)
    except QrCodeError as e:
        print("Could not encode data:", e, file=sys.stderr)
        return 1

    if args.output is None:
        print(render.to_text(symbol, border=args.border))
        return 0

    try:
        save(symbol, args.output, args.size, args.border)
    except (OSError, ValueError) as e:
        print("Error saving file:", e, file=sys.stderr)
        return 1
    print(f"Output saved as {args.output} (version {symbol.version}-{symbol.error_correction.name}, mask {symbol.mask})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
