import sys
import typer
from enum import Enum
from pathlib import Path
from typing import Optional
from loguru import logger
from prettytable import PrettyTable

from starsim.config import load_config
from starsim.backends import cpu
from starsim.frontends import headless
from starsim.helpers.generators import random_bodies, ring_bodies
from starsim.helpers.io import read_initial_conditions, save_trajectories, write_initial_conditions

app = typer.Typer(help='Brute force N-body gravity simulator')


class GeneratorKind(str, Enum):
    random = 'random'
    ring = 'ring'


def default_bodies(config, record_history):
    # Sun, Earth and Moon
    return [
        config.create_body(2e30, [0, 0, 0], [0, 0, 0], id=1, record_history=record_history),
        config.create_body(6e24, [1.5e11, 0, 0], [0, 29.78e3, 0], id=2, record_history=record_history),
        config.create_body(7e22, [1.5e11 + 3.84e8, 0, 0], [0, 29.78e3 + 1.022e3, 0], id=3,
                           record_history=record_history),
    ]


def setup_logging(verbose: bool):
    logger.remove()
    logger.add(sys.stderr, level='DEBUG' if verbose else 'INFO')


@app.command()
def run(backend_name: str = typer.Option('cpu', '--backend', help='Force computation backend'),
        frontend_name: str = typer.Option('headless', '--frontend', help='headless or matplotlib'),
        config_file: Optional[Path] = typer.Option(None, '--config', help='JSON file with simulation constants'),
        steps: Optional[int] = typer.Option(None, help='Number of steps, overrides the config file'),
        dt: Optional[float] = typer.Option(None, help='Time step in seconds, overrides the config file'),
        initial_conditions: Optional[Path] = typer.Option(None, help='Text file with one body per line'),
        output: Optional[Path] = typer.Option(None, help='Where to save the trajectories'),
        trails: bool = typer.Option(True, help='Record position history for trails'),
        plot: bool = typer.Option(False, help='Plot trajectories when done'),
        verbose: bool = typer.Option(False, '--verbose', '-v')):
    setup_logging(verbose)

    try:
        config = load_config(config_file)
        if dt is not None:
            logger.debug(f"dt = {dt} passed as an argument therefore dt in config file will not be used")
            config = config.replace(dt=dt)
        if steps is not None:
            logger.debug(f"steps = {steps} passed as an argument therefore steps in config file will not be used")
            config = config.replace(steps=steps)
    except (OSError, ValueError) as e:
        logger.error(f'Could not load configuration: {e}. Aborting')
        raise typer.Exit(code=1)

    table = PrettyTable()
    table.field_names = ["Parameter", "Value", "Unit"]
    table.align = "l"
    for row in config.as_rows():
        table.add_row(list(row))
    print("\nSimulation Parameters:")
    print(table)

    table = PrettyTable()
    table.field_names = ["Backend", "Frontend"]
    table.align = "l"
    table.add_row([f"{backend_name}", f"{frontend_name}"])
    print("\nSimulation Pipeline:")
    print(table)

    try:
        if backend_name == 'cpu':
            backend = cpu.BruteForceUpdater(config=config)
        else:
            raise NotImplementedError(f'Unknown backend "{backend_name}"')

        if frontend_name == 'headless':
            frontend = headless.Frontend(backend=backend)
        elif frontend_name == 'matplotlib':
            from starsim.frontends import matplotlib as matplotlib_frontend
            frontend = matplotlib_frontend.Frontend(backend=backend)
        else:
            raise NotImplementedError(f'Unknown frontend "{frontend_name}"')
    except NotImplementedError as e:
        logger.error(f'{e}. Aborting')
        raise typer.Exit(code=1)

    if initial_conditions is None:
        bodies = default_bodies(config, trails)
    else:
        try:
            bodies = read_initial_conditions(initial_conditions, config, record_history=trails)
        except (OSError, ValueError) as e:
            logger.error(f'Could not read initial conditions: {e}. Aborting')
            raise typer.Exit(code=1)

    logger.info('Starting simulation')
    initial = list(bodies)
    trajectories = frontend.simulate(bodies, config.steps)

    if output is not None:
        save_trajectories(output, trajectories)
    if plot:
        frontend.plot_trajectories(trajectories, initial)


@app.command()
def generate(output: Path = typer.Argument(..., help='Initial conditions file to write'),
             kind: GeneratorKind = typer.Option(GeneratorKind.random, help='Body layout'),
             count: int = typer.Option(512, help='Number of generated bodies (ring particles for "ring")'),
             seed: Optional[int] = typer.Option(None, help='Random seed'),
             verbose: bool = typer.Option(False, '--verbose', '-v')):
    setup_logging(verbose)
    if kind is GeneratorKind.ring:
        bodies = ring_bodies(n_particles=count, seed=seed)
    else:
        bodies = random_bodies(count, seed=seed)
    write_initial_conditions(output, bodies)


if __name__ == "__main__":
    app()
