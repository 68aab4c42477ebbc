import numpy as np
from typing import Iterable, Optional, Tuple

from starsim.helpers.history import PositionHistory

# A position is stored once every HISTORY_SAMPLE_RATE integrations, which gives
# a longer trail for the same memory.
HISTORY_SAMPLE_RATE = 20
HISTORY_LENGTH = 100


def _vector(values: Iterable[float]) -> np.ndarray:
    vector = np.array(values, dtype=float)
    if vector.shape != (3,):
        raise ValueError(f'Expected a 3 component vector, got shape {vector.shape}')
    vector.flags.writeable = False
    return vector


def force_between(a: 'Body', b: 'Body', gravitational_constant: float, softening: float) -> np.ndarray:
    """
    Force exerted on body `a` by body `b`, pointing from `a` towards `b`.

    F = G * m_a * m_b / (d^2 + eps^2), applied along the unit displacement.
    Coincident bodies have no direction between them and contribute nothing.
    """
    displacement = b.position - a.position
    distance = np.sqrt(displacement @ displacement)
    if distance == 0:
        return np.zeros(3)

    force = gravitational_constant * a.mass * b.mass / (distance * distance + softening * softening)
    return force * displacement / distance


class Body:
    """
    A point mass. Position and velocity are replaced, never modified in place,
    so arrays read from one body stay valid while other bodies integrate. The
    force accumulator is handed out as a copy for the same reason.
    """

    def __init__(self, mass: float, position: Iterable[float], velocity: Iterable[float],
                 generation: int = 1, id: int = 1, record_history: bool = False,
                 history_length: int = HISTORY_LENGTH, sample_rate: int = HISTORY_SAMPLE_RATE):
        mass = float(mass)
        if not mass > 0:
            raise ValueError(f'Body mass must be positive, got {mass}')
        if sample_rate < 1:
            raise ValueError(f'History sample rate must be at least 1, got {sample_rate}')

        self._generation = generation
        self._id = id
        self._mass = mass
        self._position = _vector(position)
        self._velocity = _vector(velocity)
        self._force = np.zeros(3)

        self.record_history = record_history
        self._history = PositionHistory(history_length)
        self._sample_rate = sample_rate
        self._sample_counter = 0

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def id(self) -> int:
        return self._id

    @property
    def mass(self) -> float:
        return self._mass

    @property
    def position(self) -> np.ndarray:
        return self._position

    @property
    def velocity(self) -> np.ndarray:
        return self._velocity

    @property
    def force(self) -> np.ndarray:
        return _vector(self._force)

    @property
    def history(self) -> PositionHistory:
        return self._history

    force_between = staticmethod(force_between)

    def reset_force(self) -> None:
        self._force[:] = 0.0

    def add_force(self, other: 'Body', gravitational_constant: float, softening: float) -> None:
        self._force += force_between(self, other, gravitational_constant, softening)

    def integrate(self, delta_time: float, force: Optional[Iterable[float]] = None) -> None:
        """
        Semi-implicit Euler: velocity first, then position with the new velocity.
        Uses the accumulated force unless an explicit one is given.
        """
        force = self._force if force is None else np.asarray(force, dtype=float)
        self._velocity = _vector(self._velocity + delta_time * force / self._mass)

        if self.record_history:
            self._sample_position()

        self._position = _vector(self._position + delta_time * self._velocity)

    def _sample_position(self) -> None:
        self._sample_counter += 1
        if self._sample_counter < self._sample_rate:
            return
        self._history.append(self._position)
        self._sample_counter = 0

    def clear_history(self) -> None:
        self._history.clear()

    def collide(self, other: 'Body') -> None:
        """
        Absorb `other`: masses add and velocities add. The velocity sum is not
        momentum conserving, simulation output depends on it as is.
        """
        if other is self:
            raise ValueError('A body cannot collide with itself')
        self._mass += other.mass
        self._velocity = _vector(self._velocity + other.velocity)

    def distance_to(self, other: 'Body') -> Tuple[float, np.ndarray]:
        displacement = other.position - self.position
        return float(np.sqrt(displacement @ displacement)), displacement

    def __str__(self):
        return (f'Body {self._generation:2}.{self._id:<4}: '
                f'Pos-{self._position}, Vel-{self._velocity} Mass-{self._mass:3}')

    def __repr__(self):
        return (f'Body(mass={self._mass}, position={self._position.tolist()}, '
                f'velocity={self._velocity.tolist()}, generation={self._generation}, id={self._id})')
