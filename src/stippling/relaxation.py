"""
Weighted Lloyd relaxation driver

A run owns its density field, settings and the current stipple array. Each
step partitions the stipples into Voronoi cells, moves every stipple to the
weighted centroid of its cell and replaces the array with a new one. Hosts
drive the steps: a plain loop for static runs, a timer or event loop polling
an AnimatedRun for live views.
"""

import logging
import time
from enum import Enum
from typing import Optional, Protocol

import numpy as np

from .centroid import weighted_centroid
from .errors import InvalidInputError, RelaxationError
from .initializer import initialize_points
from .partition import VoronoiPartition

logger = logging.getLogger(__name__)


class RunState(Enum):
    IDLE = 'idle'
    INITIALIZING = 'initializing'
    STEPPING = 'stepping'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'
    FAILED = 'failed'

    @property
    def is_terminal(self):
        return self in (RunState.COMPLETED, RunState.CANCELLED, RunState.FAILED)


class StippleSink(Protocol):
    """Receives the stipple array after every step and a terminal signal"""

    def on_step(self, points: np.ndarray, progress: Optional[float]) -> None:
        ...

    def on_finish(self, state: RunState, points: np.ndarray) -> None:
        ...


class NullSink:
    def on_step(self, points, progress):
        pass

    def on_finish(self, state, points):
        pass


def relax_step(points, cells, field, settings, rng=None):
    """
    Compute the next stipple array from the current one and its cells

    Args:
        points: Array [N, 2] of current positions (left untouched)
        cells: Sequence of N polygons, None where a point has no cell
        field: DensityField to integrate against
        settings: StippleSettings (sample_count and polarity are used)
        rng: Optional numpy Generator for the centroid sampler

    Returns:
        New array [N, 2]; row i is the centroid of cell i or points[i] when cell i is None
    """
    if len(cells) != len(points):
        raise ValueError(f"Partition returned {len(cells)} cells for {len(points)} points")

    new_points = np.array(points, dtype=np.float64, copy=True)
    for i, cell in enumerate(cells):
        if cell is None:
            continue
        new_points[i] = weighted_centroid(cell, field, settings.sample_count, settings.polarity, rng=rng)

    # Keep every stipple inside [0, width) x [0, height)
    np.clip(new_points[:, 0], 0.0, np.nextafter(field.width, 0), out=new_points[:, 0])
    np.clip(new_points[:, 1], 0.0, np.nextafter(field.height, 0), out=new_points[:, 1])
    return new_points


class StippleRun:
    """
    State of a single relaxation run

    Args:
        field: DensityField built from the source image
        settings: StippleSettings, fixed for the run
        partitioner: PartitionProvider, VoronoiPartition by default
        sink: StippleSink notified after every step
        rng: Optional numpy Generator for the centroid sampler
    """

    def __init__(self, field, settings, partitioner=None, sink=None, rng=None):
        if field is None:
            raise InvalidInputError("No image loaded")
        settings.validate()

        self.field = field
        self.settings = settings
        self.partitioner = partitioner if partitioner is not None else VoronoiPartition()
        self.sink = sink if sink is not None else NullSink()
        self.rng = rng if rng is not None else np.random.default_rng()

        self.state = RunState.IDLE
        self.steps_done = 0
        self.error = None
        self._points = None

    @property
    def bounds(self):
        return 0.0, 0.0, float(self.field.width), float(self.field.height)

    @property
    def points(self):
        """Current stipple array [N, 2] (read-only)"""
        return self._points

    def initialize(self):
        """Place a fresh set of stipples; discards any previous positions"""
        self.state = RunState.INITIALIZING
        points = initialize_points(self.settings, self.field)
        points.flags.writeable = False
        self._points = points
        self.steps_done = 0
        self.state = RunState.STEPPING
        return self._points

    def step(self):
        """Run one partition -> centroid -> replace step"""
        if self.state is not RunState.STEPPING:
            raise RuntimeError(f"Cannot step a run in state {self.state.value}")

        try:
            cells = self.partitioner.partition(self._points, self.bounds)
            new_points = relax_step(self._points, cells, self.field, self.settings, rng=self.rng)
        except Exception as e:
            self._fail(e)
            raise RelaxationError(f"Relaxation step {self.steps_done + 1} failed: {e}") from e

        new_points.flags.writeable = False
        self._points = new_points
        self.steps_done += 1
        logger.debug("Step %d done (%d stipples)", self.steps_done, len(new_points))
        return self._points

    def cancel(self):
        """Stop the run; the current stipples stay valid and final"""
        if self.state.is_terminal:
            return
        self.state = RunState.CANCELLED
        logger.debug("Run cancelled after %d steps", self.steps_done)
        self.sink.on_finish(self.state, self._points)

    def _finish(self, state):
        self.state = state
        self.sink.on_finish(state, self._points)

    def _fail(self, error):
        self.error = error
        logger.error("Run failed after %d steps: %s", self.steps_done, error)
        self._finish(RunState.FAILED)


class StaticRun(StippleRun):
    """Bounded run of exactly settings.iterations steps"""

    @property
    def progress(self):
        return self.steps_done / self.settings.iterations

    def step(self):
        points = super().step()
        progress = self.progress
        self.sink.on_step(points, progress)
        if self.steps_done >= self.settings.iterations:
            self._finish(RunState.COMPLETED)
        return points

    def __iter__(self):
        """Step until completion, yielding the progress fraction after each step"""
        while self.state is RunState.STEPPING:
            self.step()
            yield self.progress


class AnimatedRun(StippleRun):
    """
    Unbounded run paced by settings.frame_interval

    poll() may be called as often as the host likes; it only steps when at
    least frame_interval seconds passed since the previous step (or the start
    of the run).
    """

    def __init__(self, *args, clock=time.monotonic, **kwargs):
        super().__init__(*args, **kwargs)
        self.clock = clock
        self._last_step_time = None

    def initialize(self):
        points = super().initialize()
        self._last_step_time = self.clock()
        return points

    @property
    def running(self):
        return self.state is RunState.STEPPING

    def poll(self, now=None):
        """Step if the cadence allows it; returns True when a step ran"""
        if not self.running:
            return False
        if now is None:
            now = self.clock()
        if now - self._last_step_time < self.settings.frame_interval:
            return False
        points = self.step()
        self._last_step_time = now
        self.sink.on_step(points, None)
        return True


class RelaxationDriver:
    """
    Starts runs and makes sure only one of them is live at a time

    Args:
        partitioner: PartitionProvider shared by all runs, VoronoiPartition by default
        rng: Optional numpy Generator for the centroid sampler
    """

    def __init__(self, partitioner=None, rng=None):
        self.partitioner = partitioner if partitioner is not None else VoronoiPartition()
        self.rng = rng
        self.active = None

    def cancel(self):
        if self.active is not None:
            self.active.cancel()

    def _start(self, run_cls, field, settings, sink, **kwargs):
        if field is None:
            raise InvalidInputError("No image loaded")
        settings.validate()

        # The previous run must stop before the new one exists
        self.cancel()
        self.active = None

        run = run_cls(field, settings, partitioner=self.partitioner, sink=sink, rng=self.rng, **kwargs)
        run.initialize()
        self.active = run
        logger.info(
            "Started %s: %d stipples on %dx%d image (seed=%d, polarity=%s)",
            run_cls.__name__, settings.desired_count, field.width, field.height,
            settings.seed, settings.polarity.value,
        )
        return run

    def start_static(self, field, settings, sink=None):
        return self._start(StaticRun, field, settings, sink)

    def start_animated(self, field, settings, sink=None, clock=time.monotonic):
        return self._start(AnimatedRun, field, settings, sink, clock=clock)

    def run_static(self, field, settings, sink=None):
        """
        Run a complete static relaxation

        Returns:
            Final stipple array [desired_count, 2]
        """
        run = self.start_static(field, settings, sink)
        for _ in run:
            pass
        return run.points
