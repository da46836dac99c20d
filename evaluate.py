"""evaluate.py

Optimizer-facing entry point: one gene vector in, one fitness out.

Each call builds its own SIMULATION (own pybullet client, robot and terrain) and
tears it down afterwards, so calls are independent trials and can run in
separate processes in parallel. Nothing is kept between calls.
"""

import constants as c
from config import SimulationConfig
from simulation import SIMULATION


def evaluate(parameters, step=c.STEP, step_limit=c.STEP_LIMIT, config=None, prototype=None):
    """Fitness of `parameters` (lower is better).

    EvaluationAborted propagates so the caller can choose between skipping this
    candidate and stopping the whole search.
    """
    if config is None:
        config = SimulationConfig.from_env()
    with SIMULATION(prototype=prototype, config=config) as sim:
        return sim.Run(parameters, step, step_limit)


def random_parameters(count, rng):
    """Uniform genes in [0, 1], the range the optimizers search."""
    return [float(v) for v in rng.uniform(0.0, 1.0, size=count)]
