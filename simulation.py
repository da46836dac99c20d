"""
simulation.py

Role:
    Runs gait evaluations for one robot on one generated terrain.

What happens:
    - Construction builds (or adopts) a WORLD, clones the robot into it,
      attaches a VIEWER unless headless, and lays out the terrain once.
    - Run(parameters, step, step_limit) advances the clock in fixed steps,
      applies the gait controller to every joint group each step, steps the
      physics, and returns -x of the robot's final position.

Clock:
    SIMULATION.clock is never reset by Run. Each Run covers `step_limit`
    seconds of simulated time starting from wherever the clock is, so two runs
    of 10 steps leave the clock at 20 steps. Use Reset_Clock() or a fresh
    SIMULATION (evaluate.py does the latter) for independent trials.

Abort:
    In GUI mode, ESC/q raises EvaluationAborted; the caller decides whether to
    drop this evaluation or stop the whole process.

Run:
    python3 simulate.py --help
"""

import logging
import math
import os
import uuid
from pathlib import Path

import numpy as np

import constants as c
from config import SimulationConfig
from fitness import fitness_from_position
from motor import ParameterError, build_joint_table, check_parameters, joint_commands, parameter_count
from telemetry.logger import TelemetryLogger
from terrain import Build_Terrain, generate_obstacles

logger = logging.getLogger(__name__)

__all__ = ["SIMULATION", "EvaluationAborted", "ParameterError", "Step_Count"]


class EvaluationAborted(RuntimeError):
    """The user stopped the GUI run; no fitness was produced."""

    def __init__(self, clock, iteration):
        super().__init__(f"evaluation aborted by user at t={clock:.3f}s (step {iteration})")
        self.clock = clock
        self.iteration = iteration


def Step_Count(step, step_limit):
    """Number of `step` increments needed to cover `step_limit` seconds."""
    if not step > 0:
        raise ValueError(f"step must be > 0, got {step}")
    if not step_limit >= 0:
        raise ValueError(f"step_limit must be >= 0, got {step_limit}")
    # round() strips float noise such as 0.1 / 0.01 == 10.000000000000002
    return int(math.ceil(round(step_limit / step, 9)))


class SIMULATION:
    """Owns one WORLD, one ROBOT and its terrain; evaluations run strictly in sequence."""

    def __init__(self, prototype=None, config=None, world=None, viewer=None):
        """Build world, robot, viewer and terrain.

        Args:
            prototype: ROBOT_PROTOTYPE to clone; the generated 14-servo robot if None.
            config: SimulationConfig; defaults if None.
            world: existing world to build into (tests pass fakes); a new WORLD if None.
            viewer: render/abort collaborator; a VIEWER on the world if None and not headless.
        """
        self.config = config if config is not None else SimulationConfig()
        self.headless = self.config.headless
        self.clock = 0.0
        self.runs = 0
        # one telemetry directory per instance; evaluate() makes a new instance per call
        self.telemetryId = self.config.telemetry_run_id or f"{os.getpid()}-{uuid.uuid4().hex[:8]}"

        self._ownsWorld = world is None
        if world is None:
            from world import WORLD
            world = WORLD(tilt=self.config.tilt, gravity_z=self.config.gravity_z, headless=self.headless)
        self.world = world

        try:
            if prototype is None:
                from robot import ROBOT_PROTOTYPE
                prototype = ROBOT_PROTOTYPE.Default()
            self.robot = prototype.Clone(self.world, max_force=self.config.max_force)

            self.viewer = None
            if not self.headless:
                if viewer is None:
                    from viewer import VIEWER
                    viewer = VIEWER(self.world)
                self.viewer = viewer
                self.viewer.Attach(self.robot)

            self.jointTable = build_joint_table(len(self.robot.Servos()))

            rng = np.random.default_rng(self.config.seed)
            self.obstacles = generate_obstacles(
                self.config.obstacle_count, self.config.obstacle_size, self.config.tilt, rng
            )
            self.obstacleIds = Build_Terrain(self.world, self.obstacles, self.viewer)
        except Exception:
            self.Close()
            raise

        logger.debug("simulation ready: %d servos, %d joint groups, %d obstacles",
                     len(self.robot.Servos()), len(self.jointTable), len(self.obstacles))

    @property
    def parameter_count(self):
        return parameter_count(self.jointTable)

    def Reset_Clock(self):
        self.clock = 0.0

    def Run(self, parameters, step=c.STEP, step_limit=c.STEP_LIMIT):
        """Evaluate one gene vector; returns the fitness (-x of the final position).

        Raises:
            ParameterError: gene vector too short for the joint table, or non-finite.
            ValueError: step <= 0 or step_limit < 0.
            EvaluationAborted: user abort in GUI mode.
        """
        iterations = Step_Count(step, step_limit)
        parameters = [float(v) for v in parameters]
        check_parameters(parameters, self.jointTable)

        telemetry = self._Telemetry()
        telemetry.start(self.robot.Position())

        self.runs += 1
        fitness = None
        try:
            for i in range(iterations):
                if not self.headless and self.viewer.User_Requested_Abort():
                    raise EvaluationAborted(self.clock, i)
                self.Procedure(parameters, step)
                if telemetry.enabled:
                    telemetry.log_step(i, self.clock, self.robot.Position(), getattr(self.robot, "targets", {}))

            position = self.robot.Position()
            fitness = fitness_from_position(position)
        finally:
            # summary.json is written even when the run aborts or a step fails
            telemetry.finalize(fitness)
        logger.info("run %d: %d steps, clock %.3f, final x %.4f, fitness %.4f",
                    self.runs, iterations, self.clock, position[0], fitness)
        return fitness

    def Procedure(self, parameters, step):
        """One control step: clock, render, robot, physics, then servo targets."""
        self.clock += step
        if not self.headless:
            self.viewer.Render()
        self.robot.Advance(step)
        self.world.Advance(step)
        for servo, radians in joint_commands(self.clock, parameters, self.jointTable):
            self.robot.Set_Angle(servo, radians)

    def _Telemetry(self):
        run_id = f"run{self.runs}"
        out_dir = Path(self.config.telemetry_out) / self.telemetryId / run_id
        return TelemetryLogger(out_dir, every=self.config.telemetry_every,
                               run_id=f"{self.telemetryId}/{run_id}", enabled=self.config.telemetry)

    def Close(self):
        if self._ownsWorld and getattr(self, "world", None) is not None:
            self.world.Close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.Close()
        return False
