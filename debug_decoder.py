#!/usr/bin/env python3
"""Debug script to trace how markers move while decoding one string."""

import argparse
import sys

from htmlindex import HtmlDecoder, widen


def debug_decode(text, markers, code_points=False):
    print(f"Input: {text!r}")
    print(f"Markers: {markers}")

    if code_points:
        widen(text, markers)
        print(f"Widened: {markers}")

    print("\nTrace:")
    decoded = HtmlDecoder(debug=True).decode(text, markers)

    print(f"\nDecoded: {decoded!r}")
    print(f"Markers: {markers}")


def main():
    parser = argparse.ArgumentParser(description="Trace entity decoding and marker correction")
    parser.add_argument("text", help="Escaped HTML text")
    parser.add_argument("markers", nargs="*", type=int, help="Marker offsets into the text")
    parser.add_argument(
        "--code-points",
        action="store_true",
        help="Markers count code points; widen them to UTF-16 units first",
    )
    args = parser.parse_args()

    if any(m < 0 for m in args.markers):
        print("Markers must not be negative", file=sys.stderr)
        sys.exit(1)

    debug_decode(args.text, args.markers, code_points=args.code_points)


if __name__ == "__main__":
    main()
