import numpy as np
import matplotlib.pyplot as plt
from abc import ABC, abstractmethod
from typing import List, Optional

from starsim.backends import Backend
from starsim.helpers import Body


class Frontend(ABC):

    def __init__(self, backend: Backend):
        super().__init__()
        self.backend = backend

    @abstractmethod
    def simulate(self, bodies: List[Body], steps: int) -> np.ndarray:
        raise NotImplementedError

    def plot_trajectories(self, trajectories: np.ndarray, bodies: Optional[List[Body]] = None, show: bool = True):
        """
        Draw every body's path over the run and mark where it ended. Columns
        of merged bodies end at the step they were absorbed on.
        """
        n = trajectories.shape[1]
        fig = plt.figure(figsize=(10, 10))
        ax = fig.add_subplot(111, projection='3d')

        for i in range(n):
            path = trajectories[:, i, :]
            path = path[np.isfinite(path).all(axis=1)]
            if not len(path):
                continue
            label = f'Body {bodies[i].generation}.{bodies[i].id}' if bodies is not None else f'Body {i + 1}'
            line, = ax.plot(path[:, 0], path[:, 1], path[:, 2], linewidth=1, label=label)
            ax.plot([path[-1, 0]], [path[-1, 1]], [path[-1, 2]], 'o', color=line.get_color())

        ax.set_xlabel('x (m)')
        ax.set_ylabel('y (m)')
        ax.set_zlabel('z (m)')
        ax.set_title(f'StarSim: {n} bodies over {len(trajectories)} steps')
        if n <= 10:
            ax.legend(loc='upper right')
        if show:
            plt.show()
        return fig
