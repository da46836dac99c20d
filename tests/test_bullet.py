"""End-to-end checks in pybullet DIRECT mode."""
import math

import pytest

p = pytest.importorskip("pybullet")

from config import SimulationConfig
from evaluate import evaluate, random_parameters
from generate import SERVO_NAMES
from robot import ROBOT_PROTOTYPE
from simulation import SIMULATION
from world import WORLD

GENES = [0.6, 0.2, 0.7] * 10 + [0.5]


@pytest.fixture
def prototype(tmp_path):
    return ROBOT_PROTOTYPE.Default(tmp_path / "body.urdf")


def test_generated_robot_has_ordered_servos(prototype):
    assert prototype.urdf.exists()
    world = WORLD()
    try:
        robot = prototype.Clone(world)
        assert len(robot.Servos()) == 14
        assert robot.servoNames == SERVO_NAMES
        for k, j in enumerate(robot.Servos()):
            name = p.getJointInfo(robot.robotId, j, physicsClientId=world.clientId)[1].decode()
            assert name == SERVO_NAMES[k]
    finally:
        world.Close()


def test_world_releases_client_when_setup_fails(monkeypatch):
    import world as world_module

    clients = []
    connect = p.connect

    def recording_connect(*args, **kwargs):
        cid = connect(*args, **kwargs)
        clients.append(cid)
        return cid

    def failing_load(*args, **kwargs):
        raise p.error("cannot load plane")

    monkeypatch.setattr(world_module.p, "connect", recording_connect)
    monkeypatch.setattr(world_module.p, "loadURDF", failing_load)
    with pytest.raises(p.error):
        WORLD()
    assert len(clients) == 1
    assert not p.isConnected(physicsClientId=clients[0])


def test_missing_urdf(tmp_path):
    world = WORLD()
    try:
        with pytest.raises(FileNotFoundError):
            ROBOT_PROTOTYPE(tmp_path / "nope.urdf").Clone(world)
    finally:
        world.Close()


def test_run_returns_negated_final_x(prototype):
    with SIMULATION(prototype, SimulationConfig(seed=1)) as sim:
        fitness = sim.Run(GENES, 0.008, 0.4)
        assert fitness == pytest.approx(-sim.robot.Position()[0])
        assert sim.world.steps == 50
        assert math.isfinite(fitness)


def test_obstacles_stay_fixed(prototype):
    with SIMULATION(prototype, SimulationConfig(seed=2, obstacle_count=15, tilt=0.05)) as sim:
        sim.Run(GENES, 0.008, 0.2)
        cid = sim.world.clientId
        for body_id, ob in zip(sim.obstacleIds, sim.obstacles):
            pos, _ = p.getBasePositionAndOrientation(body_id, physicsClientId=cid)
            assert pos == pytest.approx(ob.position, abs=1e-9)


def test_simulations_do_not_share_worlds(prototype):
    with SIMULATION(prototype, SimulationConfig(seed=3)) as a, SIMULATION(prototype, SimulationConfig(seed=3)) as b:
        assert a.world.clientId != b.world.clientId
        a.Run(GENES, 0.008, 0.1)
        assert b.world.steps == 0
        assert b.robot.Position() == pytest.approx(b.robot.startPosition)


def test_close_disconnects(prototype):
    sim = SIMULATION(prototype, SimulationConfig(seed=0))
    cid = sim.world.clientId
    sim.Close()
    assert not p.isConnected(physicsClientId=cid)


def test_evaluate(prototype):
    import numpy as np

    genes = random_parameters(31, np.random.default_rng(0))
    fitness = evaluate(genes, 0.008, 0.2, config=SimulationConfig(seed=0), prototype=prototype)
    assert isinstance(fitness, float)
    assert math.isfinite(fitness)
