"""Stand-in collaborators so the stepping loop can be tested without pybullet."""
import pytest


class FakeWorld:
    def __init__(self):
        self.bodies = []
        self.steps = 0
        self.closed = False

    def Add_Static_Body(self, obstacle):
        self.bodies.append(obstacle)
        return len(self.bodies) - 1

    def Advance(self, step):
        self.steps += 1

    def Close(self):
        self.closed = True


class FakeRobot:
    def __init__(self, servo_count=14, position=(0.0, 0.0, 0.2)):
        self.servo_count = servo_count
        self.position = tuple(position)
        self.targets = {}
        self.commands = []
        self.steps = 0

    def Servos(self):
        return list(range(self.servo_count))

    def Set_Angle(self, servo, radians):
        self.targets[servo] = radians
        self.commands.append((servo, radians))

    def Advance(self, step):
        self.steps += 1

    def Position(self):
        return self.position


class FakePrototype:
    def __init__(self, robot=None):
        self.robot = robot if robot is not None else FakeRobot()

    def Clone(self, world, max_force=None):
        return self.robot


class FakeViewer:
    def __init__(self, abort_at=None):
        self.abort_at = abort_at
        self.robot = None
        self.frames = 0
        self.polls = 0
        self.shown = []

    def Attach(self, robot):
        self.robot = robot

    def Show(self, body_id):
        self.shown.append(body_id)

    def Render(self):
        self.frames += 1

    def User_Requested_Abort(self):
        aborted = self.abort_at is not None and self.polls >= self.abort_at
        self.polls += 1
        return aborted


@pytest.fixture
def world():
    return FakeWorld()


@pytest.fixture
def robot():
    return FakeRobot()


@pytest.fixture
def prototype(robot):
    return FakePrototype(robot)


@pytest.fixture
def genes():
    # 10 joint groups * 3 + frequency
    return [0.5, 0.1, 0.6] * 10 + [0.5]
