"""
Command-line script for generating stipple art from an image
"""

import argparse
import logging
import os
import sys

from tqdm import tqdm

from config import StaticConfig
from src.stippling import Polarity, RelaxationDriver, StippleError, StippleSettings
from src.utils.image_processing import load_field
from src.utils.logging_setup import setup_logging
from src.utils.rendering import create_stipple_image, save_svg


class TqdmSink:
    """Advances a tqdm bar after every relaxation step"""

    def __init__(self, pbar):
        self.pbar = pbar

    def on_step(self, points, progress):
        self.pbar.update(1)
        self.pbar.set_postfix({'progress': f"{progress:.0%}"})

    def on_finish(self, state, points):
        self.pbar.set_postfix({'state': state.value})


def generate_stipple(field, settings, output_path, svg_path=None, canvas_size=None,
                     method=StaticConfig.RENDER_METHOD, **style):
    """
    Generate stipple art from a density field

    Args:
        field: DensityField of the input image
        settings: StippleSettings for the run
        output_path: Path to save the rendered PNG
        svg_path: Optional path to save an SVG export
        canvas_size: Optional (width, height) of the outputs
        method: Rendering method ('solid' or 'gaussian')
        **style: Dot styling options (min_dot_size, dot_size_range, colorize)

    Returns:
        Final stipple array [N, 2]
    """
    driver = RelaxationDriver()

    print(f"Relaxing {settings.desired_count} stipples for {settings.iterations} iterations...")
    with tqdm(total=settings.iterations, desc="Relaxing") as pbar:
        points = driver.run_static(field, settings, sink=TqdmSink(pbar))

    print(f"Rendering stippled image using {method} method...")
    stippled_img = create_stipple_image(points, field, settings.polarity,
                                        canvas_size=canvas_size, method=method, **style)
    stippled_img.save(output_path)
    print(f"Saved stippled image: {output_path}")

    if svg_path:
        save_svg(points, field, settings.polarity, svg_path, canvas_size=canvas_size, **style)
        print(f"Saved SVG: {svg_path}")

    return points


def build_parser():
    parser = argparse.ArgumentParser(description='Generate weighted Voronoi stipple art from an image')
    parser.add_argument('--input', '-i', type=str, required=True, help='Input image path')
    parser.add_argument('--output', '-o', type=str, required=True, help='Output PNG path')
    parser.add_argument('--svg', type=str, default=None, help='Optional SVG export path')
    parser.add_argument('--count', '-n', type=int, default=StaticConfig.STIPPLE_COUNT,
                        help='Number of stipples')
    parser.add_argument('--iterations', type=int, default=StaticConfig.ITERATIONS,
                        help='Number of relaxation iterations')
    parser.add_argument('--samples', type=int, default=StaticConfig.SAMPLE_COUNT,
                        help='Monte Carlo samples per centroid estimate')
    parser.add_argument('--cutoff', type=float, default=StaticConfig.WHITE_CUTOFF,
                        help='Minimum weight for initial placement, in [0, 1]')
    parser.add_argument('--polarity', type=str, default=StaticConfig.POLARITY,
                        choices=[p.value for p in Polarity],
                        help='Which luminance extreme attracts stipples')
    parser.add_argument('--seed', type=int, default=StaticConfig.SEED, help='Seed for initial placement')
    parser.add_argument('--max-side', type=int, default=0,
                        help='Downscale the input so its longest edge is at most this (0 = keep)')
    parser.add_argument('--canvas', type=int, nargs=2, default=None, metavar=('WIDTH', 'HEIGHT'),
                        help='Output canvas size (default: image size)')
    parser.add_argument('--min-dot', type=float, default=StaticConfig.MIN_DOT_SIZE, help='Minimum dot radius')
    parser.add_argument('--dot-range', type=float, default=StaticConfig.DOT_SIZE_RANGE,
                        help='Additional radius for full-weight dots')
    parser.add_argument('--colorize', action='store_true', default=StaticConfig.COLORIZE,
                        help='Colour dots with the average image colour under them')
    parser.add_argument('--method', type=str, default=StaticConfig.RENDER_METHOD,
                        choices=['solid', 'gaussian'], help='Dot rendering method')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        settings = StippleSettings.from_config(
            StaticConfig,
            desired_count=args.count,
            iterations=args.iterations,
            sample_count=args.samples,
            white_cutoff=args.cutoff,
            polarity=args.polarity,
            seed=args.seed,
        )

        print(f"Loading image: {args.input}")
        field = load_field(args.input, max_side=args.max_side)

        StaticConfig.create_directories(os.path.dirname(args.output), os.path.dirname(args.svg or ''))

        generate_stipple(
            field, settings, args.output,
            svg_path=args.svg,
            canvas_size=tuple(args.canvas) if args.canvas else None,
            method=args.method,
            min_dot_size=args.min_dot,
            dot_size_range=args.dot_range,
            colorize=args.colorize,
        )
    except StippleError as e:
        print(f"Error: {e}")
        return 1

    print("Done!")
    return 0


if __name__ == '__main__':
    sys.exit(main())
