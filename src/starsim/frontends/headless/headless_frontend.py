import numpy as np
from tqdm import tqdm
from typing import List

from loguru import logger

from starsim.backends import Backend
from starsim.frontends import Frontend as BaseFrontend
from starsim.helpers import Body
from starsim.helpers.collisions import merge_close_bodies


class Frontend(BaseFrontend):
    """
    Runs the simulation without drawing anything and records every body's
    position after every step.

    The returned array has shape (steps, n, 3) with columns in the order of
    the bodies passed in. When collisions are enabled in the backend config,
    absorbed bodies are dropped from `bodies` and their column is NaN from
    the step they merged on.
    """

    def __init__(self, backend: Backend, progress: bool = True):
        super().__init__(backend)
        self.progress = progress

    def simulate(self, bodies: List[Body], steps: int) -> np.ndarray:
        columns = {id(body): i for i, body in enumerate(bodies)}
        trajectories = np.full((steps, len(columns), 3), np.nan)
        collision_distance = self.backend.config.collision_distance
        dt = self.backend.config.dt

        logger.info(f'Simulating {len(bodies)} bodies for {steps} steps')
        for i in tqdm(range(steps), disable=not self.progress):
            self.backend.advance(bodies, dt)

            if collision_distance > 0:
                survivors, merged = merge_close_bodies(bodies, collision_distance)
                if merged:
                    logger.info(f'Step {i}: {len(merged)} merge(s), {len(survivors)} bodies left')
                    # the driver owns the collection, shrink it in place
                    bodies[:] = survivors

            for body in bodies:
                trajectories[i, columns[id(body)]] = body.position

        logger.info('Simulation finished')
        return trajectories
