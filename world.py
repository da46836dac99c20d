"""
world.py

Role:
    One PyBullet physics world: its own client connection, gravity, a (possibly
    tilted) ground plane and the fixed terrain boxes placed on it.

Every pybullet call passes this world's physicsClientId, so several WORLDs can
live in one process without sharing state.

Tilt convention:
    Obstacle.rotation is -tilt (rotation of the ground about y). In pybullet a
    positive pitch about +y lowers the ground ahead (+x), matching
    z = tan(tilt) * -x, so both plane and boxes use pitch = tilt = -rotation.
"""

import logging

import pybullet as p
import pybullet_data

import constants as c

logger = logging.getLogger(__name__)

BOX_COLOR = [0.55, 0.45, 0.35, 1.0]


class WORLD:
    """PyBullet world: ground plane plus static terrain bodies."""

    def __init__(self, tilt=0.0, gravity_z=c.GRAVITY_Z, headless=True):
        """Connect and build the ground.

        Side effects:
            - Opens a pybullet connection (GUI when headless is False).
            - Loads "plane.urdf" from pybullet_data, pitched by `tilt`.
        """
        self.tilt = tilt
        self.headless = headless
        self.clientId = p.connect(p.DIRECT if headless else p.GUI)
        if self.clientId < 0:
            raise RuntimeError("could not connect to pybullet")
        cid = self.clientId

        try:
            if not headless:
                p.configureDebugVisualizer(p.COV_ENABLE_GUI, 0, physicsClientId=cid)

            p.setAdditionalSearchPath(pybullet_data.getDataPath(), physicsClientId=cid)
            p.setGravity(0, 0, gravity_z, physicsClientId=cid)
            self.dt = c.STEP
            p.setTimeStep(self.dt, physicsClientId=cid)

            self.planeId = p.loadURDF(
                "plane.urdf",
                baseOrientation=p.getQuaternionFromEuler([0.0, tilt, 0.0]),
                physicsClientId=cid,
            )
        except Exception:
            # nobody holds this WORLD yet, so release the client here
            self.Close()
            raise
        self.groundIds = [self.planeId]
        self.steps = 0
        logger.debug("world %d: tilt=%.3f gravity=%.2f gui=%s", cid, tilt, gravity_z, not headless)

    def Add_Static_Body(self, obstacle):
        """Create a fixed box for `obstacle` and register it as ground; returns its body id."""
        cid = self.clientId
        half = list(obstacle.half_extents)
        col = p.createCollisionShape(p.GEOM_BOX, halfExtents=half, physicsClientId=cid)
        vis = p.createVisualShape(p.GEOM_BOX, halfExtents=half, rgbaColor=BOX_COLOR, physicsClientId=cid)
        # mass 0 => static, never moved by later steps
        bodyId = p.createMultiBody(
            baseMass=0,
            baseCollisionShapeIndex=col,
            baseVisualShapeIndex=vis,
            basePosition=list(obstacle.position),
            baseOrientation=p.getQuaternionFromEuler([0.0, -obstacle.rotation, 0.0]),
            physicsClientId=cid,
        )
        self.groundIds.append(bodyId)
        return bodyId

    def Advance(self, step):
        if step != self.dt:
            p.setTimeStep(step, physicsClientId=self.clientId)
            self.dt = step
        p.stepSimulation(physicsClientId=self.clientId)
        self.steps += 1

    def Is_Connected(self):
        return self.clientId >= 0 and p.isConnected(physicsClientId=self.clientId)

    def Close(self):
        if self.Is_Connected():
            p.disconnect(physicsClientId=self.clientId)
        self.clientId = -1
