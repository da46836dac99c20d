"""robot.py

Role:
    Robot handle around a PyBullet body loaded from a URDF.

ROBOT_PROTOTYPE holds what is needed to build the robot (URDF path, start pose,
servo order). Clone(world) loads a fresh copy into that world, so each
SIMULATION gets its own body. The SIMULATION drives the ROBOT (servo targets,
stepping) but the body's physics state belongs to the world.

Notes / gotchas:
    - pybullet joint names come back as bytes.
    - Servo order is taken from the prototype's names, not from pybullet's link
      numbering, so the gait table's i / i+4 pairs always hit the intended joints.
    - Friction is raised and restitution removed, as bouncing feet ruin gaits.
"""

import logging
from pathlib import Path

import pybullet as p

import constants as c
import generate

logger = logging.getLogger(__name__)

ROBOT_FRICTION = 1.0


class ROBOT_PROTOTYPE:
    """Recipe for cloning the robot into a world."""

    def __init__(self, urdf=c.ROBOT_URDF, start=c.ROBOT_START, servo_names=None, max_force=c.MAX_FORCE):
        self.urdf = Path(urdf)
        self.start = tuple(start)
        self.servo_names = list(servo_names) if servo_names is not None else None
        self.max_force = max_force

    @classmethod
    def Default(cls, urdf=c.ROBOT_URDF, **kwargs):
        """The 14-servo robot from generate.py; writes its URDF if it is missing."""
        if not Path(urdf).exists():
            logger.info("generating %s", urdf)
            generate.Create_Robot(urdf)
        return cls(urdf, servo_names=generate.SERVO_NAMES, **kwargs)

    def Clone(self, world, max_force=None):
        if not self.urdf.exists():
            raise FileNotFoundError(f"robot description not found: {self.urdf} (run python3 generate.py)")
        return ROBOT(world, self, max_force=self.max_force if max_force is None else max_force)


class ROBOT:
    """One robot body inside one WORLD."""

    def __init__(self, world, prototype, max_force=c.MAX_FORCE):
        self.world = world
        self.clientId = world.clientId
        self.max_force = float(max_force)
        self.robotId = p.loadURDF(
            str(prototype.urdf),
            basePosition=list(prototype.start),
            physicsClientId=self.clientId,
        )

        for link in range(-1, p.getNumJoints(self.robotId, physicsClientId=self.clientId)):
            p.changeDynamics(self.robotId, link, lateralFriction=ROBOT_FRICTION, restitution=0.0,
                             physicsClientId=self.clientId)

        self.Prepare_To_Act(prototype.servo_names)
        self.targets = {}
        self.steps = 0
        self.startPosition = self.Position()

    def Prepare_To_Act(self, servo_names=None):
        """Build the ordered servo list (pybullet joint indices)."""
        revolute = {}
        for j in range(p.getNumJoints(self.robotId, physicsClientId=self.clientId)):
            info = p.getJointInfo(self.robotId, j, physicsClientId=self.clientId)
            if info[2] != p.JOINT_REVOLUTE:
                continue
            name = info[1].decode() if isinstance(info[1], (bytes, bytearray)) else str(info[1])
            revolute[name] = j

        if servo_names is None:
            self.servoNames = sorted(revolute, key=revolute.get)
        else:
            missing = [n for n in servo_names if n not in revolute]
            if missing:
                raise ValueError(f"robot has no revolute joints named {missing}")
            self.servoNames = list(servo_names)
        self.servos = [revolute[n] for n in self.servoNames]

    def Servos(self):
        return list(self.servos)

    def Set_Angle(self, servo, radians):
        """Position-control target for the servo at position `servo` in Servos()."""
        self.targets[servo] = radians
        p.setJointMotorControl2(
            self.robotId,
            self.servos[servo],
            controlMode=p.POSITION_CONTROL,
            targetPosition=radians,
            force=self.max_force,
            physicsClientId=self.clientId,
        )

    def Advance(self, step):
        self.steps += 1

    def Position(self):
        pos, _ = p.getBasePositionAndOrientation(self.robotId, physicsClientId=self.clientId)
        return tuple(pos)

    def Orientation(self):
        _, orn = p.getBasePositionAndOrientation(self.robotId, physicsClientId=self.clientId)
        return tuple(p.getEulerFromQuaternion(orn))
