#!/usr/bin/env python3
"""Analyze an image and print its color profile."""

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from palette_profile.builder import analyze_image
from palette_profile.config import AnalysisConfig
from palette_profile.render import render_html, render_text, to_json


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Analyze an image and extract its color profile.'
    )
    parser.add_argument(
        '--input', '-i',
        required=True,
        help='Path to the image file'
    )
    parser.add_argument(
        '--output', '-o',
        nargs='?',
        const=True,
        default=None,
        help='Write HTML report. Optionally specify path, otherwise auto-names from input.'
    )
    parser.add_argument('--json', help='Write the profile as JSON to this path')
    parser.add_argument('--chart', help='Write a distribution bar chart PNG to this path')
    parser.add_argument('--wheel', help='Write a hue wheel PNG to this path')
    parser.add_argument('--swatches', help='Write a dominant color swatch PNG to this path')
    parser.add_argument(
        '--downscale',
        action='store_true',
        help='Downscale to 256px before analyzing'
    )
    parser.add_argument(
        '--workers',
        type=int,
        default=None,
        help='Split the pixel pass across this many threads'
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    image_path = Path(args.input)

    # Run analysis
    try:
        config = AnalysisConfig.from_env()
        if args.workers is not None:
            config = replace(config, workers=args.workers)
        profile = analyze_image(str(image_path), downscale=args.downscale, config=config)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error analyzing image: {e}", file=sys.stderr)
        sys.exit(1)

    # Always print the report to terminal
    print(render_text(profile))

    outputs = []
    if args.output:
        if args.output is True:
            output_path = image_path.with_name(f"{image_path.stem}-palette.html")
        else:
            output_path = Path(args.output)
        outputs.append((output_path, lambda p: p.write_text(render_html(profile, str(image_path)))))
    if args.json:
        outputs.append((Path(args.json), lambda p: p.write_text(to_json(profile))))
    if args.chart or args.wheel or args.swatches:
        import matplotlib
        matplotlib.use('Agg')
        from palette_profile.visualize import draw_swatches, plot_color_wheel, plot_distribution
        if args.chart:
            outputs.append((Path(args.chart), lambda p: plot_distribution(profile, str(p))))
        if args.wheel:
            outputs.append((Path(args.wheel), lambda p: plot_color_wheel(profile, str(p))))
        if args.swatches:
            outputs.append((Path(args.swatches), lambda p: draw_swatches(profile, str(p))))

    for path, write in outputs:
        try:
            write(path)
            print(f"\nWrote: {path}")
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            sys.exit(1)


if __name__ == '__main__':
    main()
