"""motor.py

Gait controller: maps a flat gene vector to servo target angles.

Every joint group i reads three genes (a, theta, b) and all groups share the
last gene of the vector as frequency:

    a     = gene_a * 40       (0 if below the 5 degree deadband)
    theta = gene_theta * 1.0
    b     = gene_b * 40 - 20
    f     = genes[-1] * 2
    phase = a * tanh(h * sin(f * pi * (x + theta))) + b      (degrees, h = 4)

tanh(h * sin(.)) turns the sine into a rounded square wave; h sets how sharp.

Which servos a group drives comes from a joint table built once per robot:
body groups (0, 1) drive one servo, every other group drives servo i and its
mirror i + 4 so left and right stay symmetric. Outer groups 6 and 9 get their
phase scaled by 1.8.

Everything here is a pure function of (clock, genes).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

import constants as c


class ParameterError(ValueError):
    """Gene vector does not fit the robot's joint table."""


@dataclass(frozen=True)
class GaitGene:
    amplitude: float  # degrees
    phase: float
    bias: float  # degrees
    frequency: float


@dataclass(frozen=True)
class JointGroup:
    index: int
    servos: Tuple[int, ...]
    gain: float = 1.0

    @property
    def mirrored(self):
        return len(self.servos) > 1


def build_joint_table(servo_count: int,
                      trailing=c.TRAILING_SERVOS,
                      body_groups=c.BODY_GROUPS,
                      mirror_offset=c.MIRROR_OFFSET,
                      outer_groups=c.OUTER_GROUPS,
                      outer_gain=c.OUTER_GAIN) -> List[JointGroup]:
    """Group index -> servos and gain, for a robot with `servo_count` servos."""
    groups = servo_count - trailing
    if groups <= 0:
        raise ValueError(f"robot needs more than {trailing} servos, has {servo_count}")

    table = []
    for i in range(groups):
        if i < body_groups:
            servos = (i,)
        else:
            servos = (i, i + mirror_offset)
        gain = outer_gain if i in outer_groups else 1.0
        table.append(JointGroup(i, servos, gain))
    return table


def parameter_count(table):
    return c.GENES_PER_GROUP * len(table) + 1


def check_parameters(parameters: Sequence[float], table) -> None:
    need = parameter_count(table)
    if len(parameters) < need:
        raise ParameterError(
            f"gene vector has {len(parameters)} values, {len(table)} joint groups need {need}"
        )
    if not np.all(np.isfinite(np.asarray(parameters, dtype=float))):
        raise ParameterError("gene vector contains NaN or inf")


def decode_genes(gene_a, gene_theta, gene_b, last_gene) -> GaitGene:
    a = gene_a * c.AMPLITUDE_GAIN
    if a < c.AMPLITUDE_DEADBAND:
        a = 0.0
    return GaitGene(
        amplitude=a,
        phase=gene_theta * c.PHASE_GAIN,
        bias=gene_b * c.BIAS_GAIN + c.BIAS_OFFSET,
        frequency=last_gene * c.FREQUENCY_GAIN,
    )


def joint_angle(x: float, gene: GaitGene, h: float = c.SATURATION) -> float:
    """Saturated oscillator output in degrees at clock x."""
    return gene.amplitude * math.tanh(h * math.sin(gene.frequency * math.pi * (x + gene.phase))) + gene.bias


def group_gene(parameters, group: JointGroup) -> GaitGene:
    k = c.GENES_PER_GROUP * group.index
    return decode_genes(parameters[k], parameters[k + 1], parameters[k + 2], parameters[-1])


def group_phase(x, parameters, group: JointGroup) -> float:
    """Degrees for one group, outer gain applied."""
    return joint_angle(x, group_gene(parameters, group)) * group.gain


def joint_commands(x, parameters, table) -> List[Tuple[int, float]]:
    """(servo, radians) pairs in table order.

    Mirror writes of groups 2..5 land on servos 6..9, which groups 6..9 write
    again afterwards; applying in order, the later command wins.
    """
    commands = []
    for group in table:
        rad = group_phase(x, parameters, group) * c.DEG
        for servo in group.servos:
            commands.append((servo, rad))
    return commands


def resolved_targets(x, parameters, table) -> dict:
    """servo -> radians after later commands have overridden earlier ones."""
    return dict(joint_commands(x, parameters, table))
