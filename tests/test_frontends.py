import matplotlib.pyplot as plt
import numpy as np
import pytest

from starsim.backends.cpu import BruteForceUpdater
from starsim.frontends import headless
from starsim.frontends import matplotlib as matplotlib_frontend


def test_headless_records_every_step(unit_config, pair):
    frontend = headless.Frontend(backend=BruteForceUpdater(unit_config), progress=False)

    trajectories = frontend.simulate(pair, 7)

    assert trajectories.shape == (7, 2, 3)
    np.testing.assert_array_equal(trajectories[-1, 0], pair[0].position)
    # the pair falls towards the origin
    assert np.all(np.diff(trajectories[:, 0, 0]) > 0)


def test_headless_merges_close_bodies(unit_config):
    config = unit_config.replace(collision_distance=0.5)
    bodies = [
        config.create_body(1.0, [0, 0, 0], [0, 0, 0]),
        config.create_body(3.0, [0.1, 0, 0], [0, 0, 0]),
        config.create_body(1.0, [50, 0, 0], [0, 0, 0]),
    ]
    absorbed = bodies[0]
    frontend = headless.Frontend(backend=BruteForceUpdater(config), progress=False)

    trajectories = frontend.simulate(bodies, 3)

    assert len(bodies) == 2
    assert absorbed not in bodies
    assert bodies[0].mass == 4.0
    assert np.all(np.isnan(trajectories[:, 0]))
    assert np.all(np.isfinite(trajectories[:, 1:]))


def test_matplotlib_animation_and_plots(unit_config):
    bodies = [
        unit_config.create_body(1.0, [-1, 0, 0], [0, -0.5, 0], record_history=True),
        unit_config.create_body(1.0, [1, 0, 0], [0, 0.5, 0]),
    ]
    frontend = matplotlib_frontend.Frontend(backend=BruteForceUpdater(unit_config))
    trajectories = headless.Frontend(frontend.backend, progress=False).simulate(bodies, 12)

    ani = frontend.animate(bodies, trajectories, matplotlib_frontend.marker_sizes(bodies), show=False)
    history_fig = frontend.plot_history(bodies, show=False)
    trajectory_fig = frontend.plot_trajectories(trajectories, show=False)

    assert ani is not None
    assert len(bodies[0].history) == 12 // unit_config.history_sample_rate
    assert history_fig.axes and trajectory_fig.axes
    plt.close('all')


def test_marker_sizes_scale_with_mass(unit_config):
    bodies = [
        unit_config.create_body(8.0, [0, 0, 0], [0, 0, 0]),
        unit_config.create_body(1.0, [1, 0, 0], [0, 0, 0]),
        unit_config.create_body(1e-6, [2, 0, 0], [0, 0, 0]),
    ]

    sizes = matplotlib_frontend.marker_sizes(bodies)

    assert sizes[0] == pytest.approx(20)
    assert sizes[1] == pytest.approx(10)
    assert sizes[2] == 5


def test_trajectory_plot_labels_bodies_and_skips_merged(unit_config):
    bodies = [
        unit_config.create_body(1.0, [0, 0, 0], [0, 0, 0], generation=2, id=5),
        unit_config.create_body(1.0, [1, 0, 0], [0, 0, 0], generation=2, id=6),
    ]
    trajectories = np.zeros((4, 2, 3))
    trajectories[:, 1] = np.nan
    frontend = headless.Frontend(BruteForceUpdater(unit_config), progress=False)

    fig = frontend.plot_trajectories(trajectories, bodies, show=False)

    ax = fig.axes[0]
    assert ax.get_title() == 'StarSim: 2 bodies over 4 steps'
    assert [line.get_label() for line in ax.get_lines() if not line.get_label().startswith('_')] == ['Body 2.5']
    plt.close('all')
