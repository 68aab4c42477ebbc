import numpy as np
from typing import Sequence

from loguru import logger

from starsim.config import SimulationConfig
from starsim.helpers import Body
from starsim.backends import Backend


class BruteForceUpdater(Backend):
    """
    Direct summation over every ordered pair of bodies, O(n^2) per step in
    time and O(n) in memory.

    A step runs in two phases. First every body resets its own force
    accumulator and sums the pull of every other body, reading positions
    only. Then every body integrates. No body moves until all forces are in,
    so the result does not depend on the order bodies are integrated in.
    """

    def __init__(self, config: SimulationConfig):
        super().__init__(device='cpu', config=config)

    def _compute_forces(self, bodies: Sequence[Body]) -> np.ndarray:
        logger.debug(f'Computing {self.force_evaluations(len(bodies))} pairwise forces for {len(bodies)} bodies')
        G, softening = self.config.G, self.config.softening
        forces = np.zeros((len(bodies), 3), dtype=float)
        for i, body in enumerate(bodies):
            body.reset_force()
            for other in bodies:
                if other is not body:
                    body.add_force(other, G, softening)
            forces[i] = body.force
        return forces

    def _update_bodies(self, bodies: Sequence[Body], forces: np.ndarray, delta_time: float) -> None:
        for body, force in zip(bodies, forces):
            body.integrate(delta_time, force=force)
