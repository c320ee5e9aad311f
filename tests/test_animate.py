import matplotlib

matplotlib.use('Agg')

import matplotlib.pyplot as plt
import pytest

import animate
from src.stippling import RelaxationDriver, RunState, StippleSettings
from src.stippling.errors import PartitionError


class Broken:
    def partition(self, points, bounds):
        raise PartitionError("qhull exploded")


class FakeTimer:
    def __init__(self):
        self.stopped = False

    def stop(self):
        self.stopped = True


class FakeAnimation:
    def __init__(self):
        self.event_source = FakeTimer()


@pytest.fixture
def viewer(gradient_field):
    settings = StippleSettings(desired_count=20, iterations=3, sample_count=20, seed=1, frame_interval=0.0)
    viewer = animate.StippleViewer(gradient_field, settings)
    yield viewer
    plt.close(viewer.fig)


def test_update_steps_and_redraws(viewer):
    viewer.start()
    viewer._update(0)
    assert viewer.run.steps_done == 1
    assert viewer.error is None
    assert len(viewer.scatter.get_offsets()) == 20


def test_update_stops_animation_when_step_fails(viewer, capsys):
    viewer.driver = RelaxationDriver(partitioner=Broken())
    viewer.start()
    viewer.animation = FakeAnimation()

    artists = viewer._update(0)

    assert artists == (viewer.scatter,)
    assert viewer.run.state is RunState.FAILED
    assert isinstance(viewer.error, Exception)
    assert viewer.animation.event_source.stopped
    assert "Error" in capsys.readouterr().out
    # later timer ticks are no-ops on a failed run
    viewer._update(1)
    assert viewer.run.steps_done == 0
