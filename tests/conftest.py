import matplotlib
matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pytest

from ocean_world.events.logger import EventLogger
from ocean_world.events.console_log import ConsoleLogger, Verbosity


class FakeClock:
    """Settable millisecond clock."""

    def __init__(self, t=0.0):
        self.t = t

    def __call__(self):
        return self.t


@pytest.fixture(autouse=True)
def isolated_logs(tmp_path):
    EventLogger.reset(str(tmp_path / "events.jsonl"))
    ConsoleLogger._instance = None
    ConsoleLogger.get().set_verbosity(Verbosity.MINIMAL)
    yield
    EventLogger.reset()
    ConsoleLogger._instance = None
    plt.close("all")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
