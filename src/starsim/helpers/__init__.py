from starsim.helpers.history import PositionHistory
from starsim.helpers.body import Body, force_between
