"""viewer.py

GUI side of a non-headless SIMULATION: paces rendering, keeps the camera on the
robot, and reports when the user asks to stop (ESC or q in the PyBullet window,
or the window being closed).

The viewer only reads; it never changes physics state.
"""

import time

import pybullet as p

import constants as c

ABORT_KEYS = (27, ord("q"))
OBSTACLE_COLOR = [0.8, 0.35, 0.2, 1.0]


class VIEWER:
    """Render/abort collaborator for a WORLD connected in GUI mode."""

    def __init__(self, world, sleep_time=c.SLEEP_TIME, follow=True,
                 camera_distance=1.2, camera_yaw=60.0, camera_pitch=-25.0):
        self.world = world
        self.clientId = world.clientId
        self.sleep_time = sleep_time
        self.follow = follow
        self.camera = (camera_distance, camera_yaw, camera_pitch)
        self.robot = None
        self.frames = 0

    def Attach(self, robot):
        self.robot = robot

    def Show(self, body_id):
        """Highlight a terrain body so the bumps stand out from the plane."""
        p.changeVisualShape(body_id, -1, rgbaColor=OBSTACLE_COLOR, physicsClientId=self.clientId)

    def Render(self):
        if self.follow and self.robot is not None:
            distance, yaw, pitch = self.camera
            p.resetDebugVisualizerCamera(
                cameraDistance=distance,
                cameraYaw=yaw,
                cameraPitch=pitch,
                cameraTargetPosition=list(self.robot.Position()),
                physicsClientId=self.clientId,
            )
        if self.sleep_time:
            time.sleep(self.sleep_time)
        self.frames += 1

    def User_Requested_Abort(self):
        if not p.isConnected(physicsClientId=self.clientId):
            return True
        events = p.getKeyboardEvents(physicsClientId=self.clientId)
        return any(key in events and events[key] & p.KEY_WAS_TRIGGERED for key in ABORT_KEYS)
