import sys

import matplotlib
import pytest
from loguru import logger

matplotlib.use('Agg')

from starsim.config import SimulationConfig
from starsim.backends.cpu import BruteForceUpdater


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    # the CLI swaps the sink for whatever stderr was at the time
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def unit_config():
    return SimulationConfig(G=1.0, softening=0.0, dt=0.01, steps=10,
                            history_sample_rate=5, history_length=4)


@pytest.fixture
def updater(unit_config):
    return BruteForceUpdater(config=unit_config)


@pytest.fixture
def pair(unit_config):
    return [
        unit_config.create_body(1.0, [-1, 0, 0], [0, 0, 0], id=1),
        unit_config.create_body(1.0, [1, 0, 0], [0, 0, 0], id=2),
    ]
