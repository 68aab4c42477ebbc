import json
import dataclasses
from pathlib import Path
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Mapping, Tuple, Union

from loguru import logger

from starsim.helpers import Body
from starsim.helpers.body import HISTORY_LENGTH, HISTORY_SAMPLE_RATE

DEFAULT_CONFIG_FILE = Path(__file__).parent / 'nbody_constant.json'


@dataclass(frozen=True)
class SimulationConfig:
    """
    Constants for one simulation run. Built once at startup and handed to the
    backend, bodies never read it implicitly.
    """
    G: float = 6.67430e-11
    softening: float = 1e7
    dt: float = 3600.0
    steps: int = 10000
    history_sample_rate: int = HISTORY_SAMPLE_RATE
    history_length: int = HISTORY_LENGTH
    collision_distance: float = 0.0

    def __post_init__(self):
        checks = [
            ('G', self.G > 0, 'must be positive'),
            ('softening', self.softening >= 0, 'must not be negative'),
            ('dt', self.dt > 0, 'must be positive'),
            ('steps', self.steps >= 0, 'must not be negative'),
            ('history_sample_rate', self.history_sample_rate >= 1, 'must be at least 1'),
            ('history_length', self.history_length >= 1, 'must be at least 1'),
            ('collision_distance', self.collision_distance >= 0, 'must not be negative'),
        ]
        for name, ok, message in checks:
            if not ok:
                logger.error(f'Invalid configuration: {name} = {getattr(self, name)} {message}')
                raise ValueError(f'{name} {message}, got {getattr(self, name)}')

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'SimulationConfig':
        fields = {f.name: f for f in dataclasses.fields(cls)}
        for key in data:
            if key not in fields:
                logger.warning(f'Ignoring unknown configuration key "{key}"')

        values = {}
        for name, field in fields.items():
            if name not in data:
                logger.debug(f'{name} not found in configuration, using default {field.default}')
                continue
            cast = int if name in ('steps', 'history_sample_rate', 'history_length') else float
            try:
                values[name] = cast(data[name])
            except (TypeError, ValueError):
                logger.error(f'Invalid configuration: {name} = {data[name]!r} is not a number')
                raise ValueError(f'{name} must be a number, got {data[name]!r}')
        return cls(**values)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> 'SimulationConfig':
        logger.debug(f'Reading config file from {path}')
        with open(path) as f:
            return cls.from_dict(json.load(f))

    def replace(self, **changes) -> 'SimulationConfig':
        return dataclasses.replace(self, **changes)

    def create_body(self, mass: float, position: Iterable[float], velocity: Iterable[float],
                    generation: int = 1, id: int = 1, record_history: bool = False) -> Body:
        return Body(mass, position, velocity, generation=generation, id=id,
                    record_history=record_history,
                    history_length=self.history_length,
                    sample_rate=self.history_sample_rate)

    def as_rows(self) -> Iterator[Tuple[str, str, str]]:
        yield "Gravitational constant (G)", f"{self.G:.2e}", "m³ kg⁻¹ s⁻²"
        yield "Softening (ε)", f"{self.softening:.2e}", "m"
        yield "Time step (dt)", f"{self.dt}", "s"
        yield "Simulation steps", f"{self.steps}", "-"
        yield "History sample rate", f"{self.history_sample_rate}", "steps"
        yield "History length", f"{self.history_length}", "positions"
        yield "Collision distance", f"{self.collision_distance:.2e}", "m"


def load_config(path: Union[str, Path, None] = None) -> SimulationConfig:
    if path is None:
        logger.info('No config file provided, using default one')
        path = DEFAULT_CONFIG_FILE
    return SimulationConfig.from_json(path)
