"""
generate.py

Writes the robot description body.urdf used by robot.py.

The robot is a segmented quadruped with 14 revolute servos:
    - two body joints: Rear_Mid (spine pitch) and Mid_Front (spine yaw)
    - four legs, each with a hip swing, a hip lift and a knee

Servo order matters: the gait controller drives servo i together with its
left/right mirror i + 4, and treats servos 10..13 (the knees) as mirror-only.
Right-side joints use negated axes so one command moves both sides symmetrically.

Usage:
    python3 generate.py [path]
"""

import sys
import xml.etree.ElementTree as ET

import constants as c

SERVO_NAMES = [
    "Rear_Mid",
    "Mid_Front",
    "Front_FrontLeftHip",
    "Rear_BackLeftHip",
    "FrontLeftHip_FrontLeftThigh",
    "BackLeftHip_BackLeftThigh",
    "Front_FrontRightHip",
    "Rear_BackRightHip",
    "FrontRightHip_FrontRightThigh",
    "BackRightHip_BackRightThigh",
    "FrontLeftThigh_FrontLeftShin",
    "BackLeftThigh_BackLeftShin",
    "FrontRightThigh_FrontRightShin",
    "BackRightThigh_BackRightShin",
]

JOINT_LIMIT = 1.57
JOINT_EFFORT = 100.0
JOINT_VELOCITY = 10.0


def _xyz(v):
    return " ".join(f"{float(a):g}" for a in v)


def Send_Cube(robot, name, pos, size, mass):
    """Box link with its collision, visual and inertia centered at `pos` (link frame)."""
    link = ET.SubElement(robot, "link", name=name)
    lx, ly, lz = size
    inertial = ET.SubElement(link, "inertial")
    ET.SubElement(inertial, "origin", xyz=_xyz(pos), rpy="0 0 0")
    ET.SubElement(inertial, "mass", value=f"{mass:g}")
    ET.SubElement(
        inertial, "inertia",
        ixx=f"{mass * (ly * ly + lz * lz) / 12:g}", ixy="0", ixz="0",
        iyy=f"{mass * (lx * lx + lz * lz) / 12:g}", iyz="0",
        izz=f"{mass * (lx * lx + ly * ly) / 12:g}",
    )
    for tag in ("visual", "collision"):
        el = ET.SubElement(link, tag)
        ET.SubElement(el, "origin", xyz=_xyz(pos), rpy="0 0 0")
        geometry = ET.SubElement(el, "geometry")
        ET.SubElement(geometry, "box", size=_xyz(size))
    return link


def Send_Joint(robot, name, parent, child, position, axis):
    joint = ET.SubElement(robot, "joint", name=name, type="revolute")
    ET.SubElement(joint, "parent", link=parent)
    ET.SubElement(joint, "child", link=child)
    ET.SubElement(joint, "origin", xyz=_xyz(position), rpy="0 0 0")
    ET.SubElement(joint, "axis", xyz=_xyz(axis))
    ET.SubElement(joint, "limit", lower=f"{-JOINT_LIMIT:g}", upper=f"{JOINT_LIMIT:g}",
                  effort=f"{JOINT_EFFORT:g}", velocity=f"{JOINT_VELOCITY:g}")
    return joint


def _leg(robot, joints, prefix, body, anchor, side):
    """One leg: hip (swing about z), thigh (lift about x), shin (knee about x)."""
    hip, thigh, shin = prefix + "Hip", prefix + "Thigh", prefix + "Shin"
    Send_Cube(robot, hip, [0, 0, 0], [0.04, 0.04, 0.04], 0.05)
    Send_Cube(robot, thigh, [0, side * 0.06, 0], [0.04, 0.12, 0.03], 0.1)
    Send_Cube(robot, shin, [0, 0, -0.075], [0.03, 0.03, 0.15], 0.08)
    joints[f"{body}_{hip}"] = dict(parent=body, child=hip, position=anchor, axis=[0, 0, side])
    joints[f"{hip}_{thigh}"] = dict(parent=hip, child=thigh, position=[0, side * 0.02, 0], axis=[side, 0, 0])
    joints[f"{thigh}_{shin}"] = dict(parent=thigh, child=shin, position=[0, side * 0.12, 0], axis=[side, 0, 0])


def Create_Robot(path=c.ROBOT_URDF):
    """Write body.urdf (links first, then joints in servo order); returns the path."""
    robot = ET.Element("robot", name="quadruped14")

    Send_Cube(robot, "Rear", [0, 0, 0], [0.2, 0.2, 0.06], 0.5)
    Send_Cube(robot, "Mid", [0.02, 0, 0], [0.04, 0.1, 0.04], 0.05)
    Send_Cube(robot, "Front", [0.1, 0, 0], [0.2, 0.2, 0.06], 0.5)

    joints = {
        "Rear_Mid": dict(parent="Rear", child="Mid", position=[0.1, 0, 0], axis=[0, 1, 0]),
        "Mid_Front": dict(parent="Mid", child="Front", position=[0.04, 0, 0], axis=[0, 0, 1]),
    }
    _leg(robot, joints, "FrontLeft", "Front", [0.15, 0.1, 0], +1)
    _leg(robot, joints, "BackLeft", "Rear", [-0.05, 0.1, 0], +1)
    _leg(robot, joints, "FrontRight", "Front", [0.15, -0.1, 0], -1)
    _leg(robot, joints, "BackRight", "Rear", [-0.05, -0.1, 0], -1)

    for name in SERVO_NAMES:
        Send_Joint(robot, name, **joints[name])

    tree = ET.ElementTree(robot)
    ET.indent(tree)
    tree.write(str(path), encoding="utf-8", xml_declaration=True)
    return path


if __name__ == "__main__":
    print(Create_Robot(sys.argv[1] if len(sys.argv) > 1 else c.ROBOT_URDF))
