import numpy as np
from pathlib import Path
from typing import Iterable, List, Union

from loguru import logger

from starsim.helpers.body import Body

PathLike = Union[str, Path]


def read_initial_conditions(filename: PathLike, config=None, record_history: bool = False) -> List[Body]:
    """
    Read bodies from a text file, one per line.

    Lines hold either `mass x y z vx vy vz` or, as written by the ring
    generator, `mass radius x y z vx vy vz` (the radius is not simulated).
    Blank lines and lines starting with `#` are skipped. Bodies get ids in
    file order starting at 1.
    """
    bodies = []
    with open(filename, "r") as file:
        for line_num, line in enumerate(file, start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            try:
                data = list(map(float, line.split()))
            except ValueError:
                raise ValueError(f"{filename}:{line_num}: expected numbers, got {line!r}")

            if len(data) == 7:
                mass, position, velocity = data[0], data[1:4], data[4:7]
            elif len(data) == 8:
                mass, position, velocity = data[0], data[2:5], data[5:8]
            else:
                raise ValueError(f"{filename}:{line_num}: expected 7 or 8 columns, got {len(data)}")

            body_id = len(bodies) + 1
            if config is None:
                body = Body(mass, position, velocity, id=body_id, record_history=record_history)
            else:
                body = config.create_body(mass, position, velocity, id=body_id, record_history=record_history)
            bodies.append(body)

    logger.debug(f"Read {len(bodies)} bodies from {filename}")
    return bodies


def write_initial_conditions(filename: PathLike, bodies: Iterable[Body]) -> None:
    with open(filename, "w") as file:
        for body in bodies:
            values = [body.mass, *body.position, *body.velocity]
            file.write(" ".join(repr(float(v)) for v in values) + "\n")
    logger.info(f"Initial conditions written to {filename}")


def save_trajectories(filename: PathLike, trajectories: np.ndarray) -> None:
    """Save a (steps, n, 3) trajectory array, one line of flattened positions per step."""
    trajectories = np.asarray(trajectories, dtype=float)
    with open(filename, "w") as file:
        for step in trajectories:
            file.write(" ".join(map(repr, step.ravel().tolist())) + "\n")
    logger.info(f"Trajectories saved to {filename}")


def read_trajectories(filename: PathLike) -> np.ndarray:
    steps = []
    with open(filename, "r") as file:
        for line in file:
            if line.strip():
                steps.append(np.array(list(map(float, line.split()))).reshape(-1, 3))
    return np.array(steps)
