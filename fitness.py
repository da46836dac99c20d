"""fitness.py

Score reduction for one evaluation.

The optimizers minimize, and the robot walks towards -x, so the score is the
negated final x: a robot ending at x = 3.2 scores -3.2.
"""

import numpy as np

# Genes holding the amplitudes of the leg-lift and leg-sweep joint groups
LIFT_GENES = (6, 12)
SWEEP_GENES = (9, 15)


def fitness_from_position(position) -> float:
    """-x of the final base position (x, y, z)."""
    return -float(position[0])


def behavior_descriptor(parameters):
    """(mean lift amplitude gene, mean sweep amplitude gene), both in [0, 1].

    Two-dimensional behavior description for archive-based optimizers such as
    MAP-Elites.
    """
    genes = np.asarray(parameters, dtype=float)
    need = max(LIFT_GENES + SWEEP_GENES) + 1
    if genes.size < need:
        raise ValueError(f"behavior descriptor needs {need} genes, got {genes.size}")
    return (float(genes[list(LIFT_GENES)].mean()), float(genes[list(SWEEP_GENES)].mean()))
