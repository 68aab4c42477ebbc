import numpy as np
import matplotlib.pyplot as plt
from typing import List
from matplotlib.animation import FuncAnimation

from starsim.backends import Backend
from starsim.frontends import Frontend as BaseFrontend
from starsim.frontends.headless import Frontend as HeadlessFrontend
from starsim.helpers import Body

COLORS = ['yellow', 'blue', 'gray', 'green', 'red', 'purple']


def marker_sizes(bodies: List[Body]) -> List[float]:
    max_mass = max(body.mass for body in bodies)
    return [max(5, 20 * (body.mass / max_mass) ** (1 / 3)) for body in bodies]


class Frontend(BaseFrontend):
    """
    Simulates headlessly, then replays the run as a 3D animation. Trails are
    drawn from each body's sampled position history, so bodies must be created
    with `record_history=True` to get them.
    """

    def __init__(self, backend: Backend, trail_window: int = 0):
        super().__init__(backend)
        # positions shown per trail when replaying; 0 uses the history capacity
        self.trail_window = trail_window

    def simulate(self, bodies: List[Body], steps: int) -> np.ndarray:
        initial = list(bodies)
        sizes = marker_sizes(initial)
        headless_frontend = HeadlessFrontend(backend=self.backend)
        trajectories = headless_frontend.simulate(bodies, steps)
        self.animate(initial, trajectories, sizes)
        return trajectories

    def animate(self, bodies: List[Body], trajectories: np.ndarray, sizes: List[float], show: bool = True):
        n = trajectories.shape[1]
        sample_rate = self.backend.config.history_sample_rate
        window = self.trail_window or self.backend.config.history_length

        fig = plt.figure(figsize=(10, 10))
        ax = fig.add_subplot(111, projection='3d')
        finite = trajectories[np.isfinite(trajectories).all(axis=2)]
        if len(finite):
            low, high = finite.min(axis=0), finite.max(axis=0)
            center = (low + high) / 2
            half = 0.55 * max((high - low).max(), 1.0)
            ax.set_xlim(center[0] - half, center[0] + half)
            ax.set_ylim(center[1] - half, center[1] + half)
            ax.set_zlim(center[2] - half, center[2] + half)

        scatters = [ax.plot([], [], [], 'o', markersize=size, color=COLORS[i % len(COLORS)])[0]
                    for i, size in enumerate(sizes)]
        trails = [ax.plot([], [], [], '-', linewidth=1, color=COLORS[i % len(COLORS)])[0]
                  if body.record_history else None
                  for i, body in enumerate(bodies)]

        ax.set_xlabel('X position (m)')
        ax.set_ylabel('Y position (m)')
        ax.set_zlabel('Z position (m)')
        ax.set_title(f'{n} Body Simulation')

        artists = scatters + [t for t in trails if t is not None]

        def init():
            for artist in artists:
                artist.set_data([], [])
                artist.set_3d_properties([])
            return artists

        def update(frame):
            time_step = trajectories[frame, ...]
            for i, (scatter, position) in enumerate(zip(scatters, time_step)):
                scatter.set_data([position[0]], [position[1]])
                scatter.set_3d_properties([position[2]])

                if trails[i] is not None:
                    # replay the same stride the history ring buffer samples with
                    start = max(0, frame - window * sample_rate)
                    trail = trajectories[start:frame + 1:sample_rate, i, :]
                    trails[i].set_data(trail[:, 0], trail[:, 1])
                    trails[i].set_3d_properties(trail[:, 2])
            return artists

        ani = FuncAnimation(fig, update, frames=len(trajectories), init_func=init,
                            blit=True, interval=1)
        if show:
            plt.show()
        return ani

    def plot_history(self, bodies: List[Body], show: bool = True):
        """Plot the trails currently held in each body's position history."""
        fig = plt.figure(figsize=(10, 10))
        ax = fig.add_subplot(111, projection='3d')
        for i, body in enumerate(bodies):
            color = COLORS[i % len(COLORS)]
            trail = body.history.to_array()
            if len(trail):
                ax.plot(trail[:, 0], trail[:, 1], trail[:, 2], color=color)
            ax.plot([body.position[0]], [body.position[1]], [body.position[2]], 'o', color=color)

        ax.set_xlabel('X position (m)')
        ax.set_ylabel('Y position (m)')
        ax.set_zlabel('Z position (m)')
        ax.set_title('Position history')
        if show:
            plt.show()
        return fig
