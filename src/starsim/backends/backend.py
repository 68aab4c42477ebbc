import numpy as np
from abc import ABC, abstractmethod
from typing import Iterable, Sequence

from starsim.config import SimulationConfig
from starsim.helpers import Body


class Backend(ABC):

    def __init__(self, device: str, config: SimulationConfig):
        super().__init__()

        self.device = device
        self.config = config

    @staticmethod
    def force_evaluations(n: int) -> int:
        """Pairwise force evaluations a direct summation step costs for `n` bodies."""
        return n * (n - 1)

    @abstractmethod
    def _compute_forces(self, bodies: Sequence[Body]) -> np.ndarray:
        raise NotImplementedError

    @abstractmethod
    def _update_bodies(self, bodies: Sequence[Body], forces: np.ndarray, delta_time: float) -> None:
        raise NotImplementedError

    def advance(self, bodies: Iterable[Body], delta_time: float) -> None:
        if not delta_time > 0:
            raise ValueError(f'Time step must be positive, got {delta_time}')
        bodies = list(bodies)
        forces = self._compute_forces(bodies)
        self._update_bodies(bodies, forces, delta_time)

    def step(self, bodies: Iterable[Body]) -> np.ndarray:
        bodies = list(bodies)
        self.advance(bodies, self.config.dt)
        return np.array([b.position for b in bodies]).reshape(len(bodies), 3)
