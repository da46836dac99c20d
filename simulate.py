"""simulate.py

Evaluate one gait gene vector on generated rough terrain.

Usage:
    python3 simulate.py --random --seed 3
    python3 simulate.py --params best.json --gui
    python3 simulate.py --params best.json --fitness-file fitness0.txt

--params takes a JSON list of floats, or an object with a "parameters" list.
Options left unset fall back to env vars, then constants.py (see config.py).

Exit status: 0 on success or user abort (ESC in the GUI), 1 on bad input.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

import numpy as np

import constants as c
from config import SimulationConfig
from evaluate import random_parameters
from fitness import behavior_descriptor
from log import configure_logging
from robot import ROBOT_PROTOTYPE
from simulation import SIMULATION, EvaluationAborted, ParameterError

logger = logging.getLogger("simulate")


def load_parameters(path):
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("parameters")
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a list of floats or {{\"parameters\": [...]}}")
    return [float(v) for v in data]


def build_parser():
    ap = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    src = ap.add_mutually_exclusive_group(required=True)
    src.add_argument("--params", type=str, help="JSON file with the gene vector")
    src.add_argument("--random", action="store_true", help="evaluate a uniform random gene vector")
    ap.add_argument("--seed", type=int, default=0, help="seed for --random")
    ap.add_argument("--step", type=float, default=c.STEP)
    ap.add_argument("--step-limit", type=float, default=c.STEP_LIMIT, help="simulated seconds")
    ap.add_argument("--tilt", type=float, default=None, help="ground tilt (radians)")
    ap.add_argument("--obstacles", type=int, default=None)
    ap.add_argument("--size", type=int, default=None, help="obstacle size scale")
    ap.add_argument("--terrain-seed", type=int, default=None)
    ap.add_argument("--gui", action="store_true")
    ap.add_argument("--urdf", type=str, default=c.ROBOT_URDF)
    ap.add_argument("--fitness-file", type=str, default=None, help="also write the fitness here")
    return ap


def main(argv=None):
    args = build_parser().parse_args(argv)
    configure_logging()

    try:
        config = SimulationConfig.from_env(
            tilt=args.tilt,
            headless=False if args.gui else None,
            obstacle_count=args.obstacles,
            obstacle_size=args.size,
            seed=args.terrain_seed,
        )
        prototype = ROBOT_PROTOTYPE.Default(args.urdf, max_force=config.max_force)
        with SIMULATION(prototype=prototype, config=config) as sim:
            if args.random:
                parameters = random_parameters(sim.parameter_count, np.random.default_rng(args.seed))
            else:
                parameters = load_parameters(args.params)
            fitness = sim.Run(parameters, args.step, args.step_limit)
    except EvaluationAborted as e:
        logger.warning("%s", e)
        return 0
    except (ParameterError, ValueError, FileNotFoundError) as e:
        logger.error("%s", e)
        return 1

    print("FITNESS", fitness, flush=True)
    logger.info("behavior descriptor (lift, sweep) = %s", behavior_descriptor(parameters))
    if args.fitness_file:
        Path(args.fitness_file).write_text(f"{fitness}\n", encoding="utf-8")
    return 0


if __name__ == "__main__":
    sys.exit(main())
