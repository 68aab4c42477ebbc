import numpy as np
from typing import List, Optional, Tuple

from starsim.helpers.body import Body


def random_bodies(num_bodies: int, mass_range: Tuple[float, float] = (1e20, 1e30),
                  pos_range: Tuple[float, float] = (-1e3, 1e3),
                  vel_range: Tuple[float, float] = (-1e1, 1e1),
                  seed: Optional[int] = None, config=None) -> List[Body]:
    """
    Bodies with masses, position and velocity components drawn uniformly
    from the given (min, max) ranges.
    """
    rng = np.random.default_rng(seed)
    masses = rng.uniform(*mass_range, size=num_bodies)
    positions = rng.uniform(*pos_range, size=(num_bodies, 3))
    velocities = rng.uniform(*vel_range, size=(num_bodies, 3))
    return [_make_body(config, m, p, v, i + 1) for i, (m, p, v) in enumerate(zip(masses, positions, velocities))]


def ring_bodies(n_particles: int = 50, central_mass: float = 1e30, particle_mass: float = 1e20,
                radius_mean: float = 1.1e11, radius_variation: float = 1e9, z_variation: float = 1e9,
                inclination_variation: float = 5.0, speed_variation: float = 1000.0,
                G: float = 6.67430e-11, seed: Optional[int] = None, config=None) -> List[Body]:
    """
    A central body at rest with a ring of particles around it on roughly
    circular orbits. Inclinations are in degrees.
    """
    rng = np.random.default_rng(seed)
    bodies = [_make_body(config, central_mass, [0.0, 0.0, 0.0], [0.0, 0.0, 0.0], 1)]

    for i in range(n_particles):
        r = radius_mean + rng.uniform(-radius_variation, radius_variation)
        v_orbital = np.sqrt(G * central_mass / r)

        angle = rng.uniform(0, 2 * np.pi)
        x = r * np.cos(angle)
        y = r * np.sin(angle)
        z = rng.uniform(-z_variation, z_variation)

        # tilt the orbital velocity out of the XY plane
        inclination = np.radians(rng.uniform(-inclination_variation, inclination_variation))
        v_orbital_z = v_orbital * np.sin(inclination)
        v_orbital_xy = v_orbital * np.cos(inclination)

        vx = -v_orbital_xy * np.sin(angle) + rng.uniform(-speed_variation, speed_variation)
        vy = v_orbital_xy * np.cos(angle) + rng.uniform(-speed_variation, speed_variation)
        vz = v_orbital_z + rng.uniform(-speed_variation / 10, speed_variation / 10)

        bodies.append(_make_body(config, particle_mass, [x, y, z], [vx, vy, vz], i + 2))

    return bodies


def _make_body(config, mass, position, velocity, body_id) -> Body:
    if config is None:
        return Body(mass, position, velocity, id=body_id)
    return config.create_body(mass, position, velocity, id=body_id)
