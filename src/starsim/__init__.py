from starsim.config import SimulationConfig, load_config
from starsim.helpers import Body, PositionHistory, force_between
from starsim.backends import Backend
from starsim.backends.cpu import BruteForceUpdater

__version__ = '0.1.0'
