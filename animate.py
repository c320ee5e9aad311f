"""
Live view of the relaxation: stipples move every frame until the window is closed
"""

import argparse
import logging
import sys

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.animation import FuncAnimation

from config import AnimatedConfig
from src.stippling import Polarity, RelaxationDriver, StippleError, StippleSettings
from src.utils.image_processing import load_field
from src.utils.logging_setup import setup_logging
from src.utils.rendering import background_color, compute_dots, save_svg


class StippleViewer:
    """
    Drives an AnimatedRun from a matplotlib timer

    The timer fires more often than the run's frame interval; the run decides
    when a step is due. Pressing 'r' restarts with the next seed.
    """

    def __init__(self, field, settings, min_dot_size=AnimatedConfig.MIN_DOT_SIZE,
                 dot_size_range=AnimatedConfig.DOT_SIZE_RANGE, colorize=AnimatedConfig.COLORIZE):
        self.field = field
        self.settings = settings
        self.style = dict(min_dot_size=min_dot_size, dot_size_range=dot_size_range, colorize=colorize)
        self.driver = RelaxationDriver()
        self.run = None
        self.animation = None
        self.error = None

        self.fig, self.ax = plt.subplots(figsize=(8, 8 * field.height / field.width))
        self.fig.patch.set_facecolor(np.asarray(background_color(settings.polarity)) / 255.0)
        self.ax.set_facecolor(np.asarray(background_color(settings.polarity)) / 255.0)
        self.ax.set_xlim(0, field.width)
        self.ax.set_ylim(field.height, 0)
        self.ax.set_aspect('equal')
        self.ax.axis('off')
        self.scatter = self.ax.scatter([], [], s=[], c=[])

        self.fig.canvas.mpl_connect('close_event', self._on_close)
        self.fig.canvas.mpl_connect('key_press_event', self._on_key)

    def start(self, seed=None):
        if seed is not None:
            self.settings = self.settings.with_changes(seed=seed)
        self.run = self.driver.start_animated(self.field, self.settings)
        self._draw(self.run.points)
        self.ax.set_title(f"seed={self.settings.seed}")

    def _draw(self, points):
        dots = compute_dots(points, self.field, self.settings.polarity, **self.style)
        self.scatter.set_offsets(np.column_stack([[d.x for d in dots], [d.y for d in dots]]))
        # scatter sizes are areas in points^2
        self.scatter.set_sizes(np.array([(2 * d.radius) ** 2 for d in dots]))
        self.scatter.set_color(np.array([d.fill for d in dots]) / 255.0)

    def _update(self, frame):
        try:
            stepped = self.run is not None and self.run.poll()
        except StippleError as e:
            print(f"Error: {e}")
            self.error = e
            if self.animation is not None:
                self.animation.event_source.stop()
            return (self.scatter,)
        if stepped:
            self._draw(self.run.points)
            self.ax.set_title(f"seed={self.settings.seed}  step={self.run.steps_done}")
        return (self.scatter,)

    def _on_close(self, event):
        self.driver.cancel()

    def _on_key(self, event):
        if event.key == 'r':
            self.start(self.settings.seed + 1)

    def show(self, timer_interval_ms=20):
        self.start()
        # Keep a reference so the animation is not garbage collected
        self.animation = FuncAnimation(self.fig, self._update, interval=timer_interval_ms,
                                       blit=False, cache_frame_data=False)
        plt.show()
        self.driver.cancel()
        return self.run


def main(argv=None):
    parser = argparse.ArgumentParser(description='Animate weighted Voronoi relaxation on an image')
    parser.add_argument('--input', '-i', type=str, required=True, help='Input image path')
    parser.add_argument('--count', '-n', type=int, default=AnimatedConfig.STIPPLE_COUNT,
                        help='Number of stipples')
    parser.add_argument('--samples', type=int, default=AnimatedConfig.SAMPLE_COUNT,
                        help='Monte Carlo samples per centroid estimate')
    parser.add_argument('--cutoff', type=float, default=AnimatedConfig.WHITE_CUTOFF,
                        help='Minimum weight for initial placement, in [0, 1]')
    parser.add_argument('--polarity', type=str, default=AnimatedConfig.POLARITY,
                        choices=[p.value for p in Polarity])
    parser.add_argument('--seed', type=int, default=AnimatedConfig.SEED)
    parser.add_argument('--interval', type=float, default=AnimatedConfig.FRAME_INTERVAL,
                        help='Minimum seconds between relaxation steps')
    parser.add_argument('--max-side', type=int, default=512,
                        help='Downscale the input so its longest edge is at most this (0 = keep)')
    parser.add_argument('--colorize', action='store_true', default=AnimatedConfig.COLORIZE)
    parser.add_argument('--svg', type=str, default=None, help='Export the last frame as SVG on close')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        settings = StippleSettings.from_config(
            AnimatedConfig,
            desired_count=args.count,
            sample_count=args.samples,
            white_cutoff=args.cutoff,
            polarity=args.polarity,
            seed=args.seed,
            frame_interval=args.interval,
        )
        print(f"Loading image: {args.input}")
        field = load_field(args.input, max_side=args.max_side)

        viewer = StippleViewer(field, settings, colorize=args.colorize)
        print("Close the window to stop, press 'r' to restart with a new seed")
        run = viewer.show()
        print(f"Stopped after {run.steps_done} steps ({run.state.value})")
        if viewer.error is not None:
            return 1

        if args.svg:
            save_svg(run.points, field, viewer.settings.polarity, args.svg, colorize=args.colorize)
            print(f"Saved SVG: {args.svg}")
    except StippleError as e:
        print(f"Error: {e}")
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
