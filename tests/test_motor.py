"""Gait controller: scaling, deadband, mirroring and outer-joint gain."""
import math

import numpy as np
import pytest

from motor import (
    ParameterError,
    build_joint_table,
    check_parameters,
    decode_genes,
    group_phase,
    joint_angle,
    joint_commands,
    parameter_count,
    resolved_targets,
)

TABLE = build_joint_table(14)


def test_joint_table_layout():
    assert len(TABLE) == 10
    assert parameter_count(TABLE) == 31
    assert TABLE[0].servos == (0,)
    assert TABLE[1].servos == (1,)
    assert TABLE[2].servos == (2, 6)
    assert TABLE[9].servos == (9, 13)
    assert [g.index for g in TABLE if g.gain != 1.0] == [6, 9]
    assert TABLE[6].gain == pytest.approx(1.8)


def test_joint_table_needs_more_than_trailing_servos():
    with pytest.raises(ValueError):
        build_joint_table(4)


def test_decode_genes_scaling():
    g = decode_genes(0.5, 0.25, 0.75, 0.6)
    assert g.amplitude == pytest.approx(20.0)
    assert g.phase == pytest.approx(0.25)
    assert g.bias == pytest.approx(10.0)
    assert g.frequency == pytest.approx(1.2)


def test_amplitude_deadband():
    assert decode_genes(0.1, 0.0, 0.5, 0.5).amplitude == 0.0
    # exactly 5 degrees is kept
    assert decode_genes(0.125, 0.0, 0.5, 0.5).amplitude == pytest.approx(5.0)


def test_deadband_phase_is_bias():
    genes = [0.1, 0.3, 0.75] * 10 + [0.7]
    for x in (0.0, 0.13, 1.7):
        assert group_phase(x, genes, TABLE[3]) == pytest.approx(10.0)


def test_joint_angle_formula():
    g = decode_genes(0.5, 0.1, 0.6, 0.5)
    x = 0.3
    expected = 20.0 * math.tanh(4 * math.sin(1.0 * math.pi * (x + 0.1))) + 4.0
    assert joint_angle(x, g) == pytest.approx(expected)


def test_controller_is_deterministic(genes):
    first = joint_commands(0.42, genes, TABLE)
    second = joint_commands(0.42, genes, TABLE)
    assert first == second


def test_mirrored_groups_emit_identical_angles():
    rng = np.random.default_rng(1)
    genes = list(rng.uniform(0, 1, size=31))
    commands = joint_commands(0.77, genes, TABLE)
    pos = 0
    for group in TABLE:
        emitted = commands[pos:pos + len(group.servos)]
        pos += len(group.servos)
        assert [s for s, _ in emitted] == list(group.servos)
        if group.index > 1:
            (i, a), (j, b) = emitted
            assert j == i + 4
            assert a == b
    assert pos == len(commands)


def test_outer_joint_amplification():
    genes = [0.6, 0.2, 0.4] * 10 + [0.8]
    for x in (0.05, 0.5, 1.25):
        plain = group_phase(x, genes, TABLE[5])
        assert group_phase(x, genes, TABLE[6]) == pytest.approx(1.8 * plain)
        assert group_phase(x, genes, TABLE[9]) == pytest.approx(1.8 * plain)


def test_later_groups_override_mirror_writes():
    rng = np.random.default_rng(7)
    genes = list(rng.uniform(0, 1, size=31))
    targets = resolved_targets(0.3, genes, TABLE)
    assert sorted(targets) == list(range(14))
    assert targets[6] == pytest.approx(group_phase(0.3, genes, TABLE[6]) * math.pi / 180)
    assert targets[2] == pytest.approx(group_phase(0.3, genes, TABLE[2]) * math.pi / 180)
    assert targets[10] == targets[6]


def test_check_parameters():
    check_parameters([0.5] * 31, TABLE)
    check_parameters([0.5] * 40, TABLE)
    with pytest.raises(ParameterError):
        check_parameters([0.5] * 30, TABLE)
    with pytest.raises(ParameterError):
        check_parameters([0.5] * 30 + [float("nan")], TABLE)
