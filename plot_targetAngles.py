"""
plot_targetAngles.py

Debugging utility: plots the gait controller's servo targets over time for one
gene vector, without running physics. Useful to eyeball deadbanded groups,
square-wave sharpness and the 1.8x outer groups.

Usage:
    python3 plot_targetAngles.py --params best.json --seconds 4 --out data/targetAngles.png
"""

import argparse
import os

import numpy as np
import matplotlib
matplotlib.use("Agg")  # no GUI windows
import matplotlib.pyplot as plt

import constants as c
from generate import SERVO_NAMES
from motor import build_joint_table, resolved_targets
from simulate import load_parameters

SERVOS = len(SERVO_NAMES)


def target_angles(parameters, seconds=c.STEP_LIMIT, step=c.STEP, servo_count=SERVOS):
    """(times, angles[step, servo]) in seconds / radians, sampled like the stepping loop."""
    table = build_joint_table(servo_count)
    n = int(round(seconds / step))
    times = step * np.arange(1, n + 1)
    angles = np.zeros((n, servo_count))
    for k, x in enumerate(times):
        for servo, rad in resolved_targets(float(x), parameters, table).items():
            angles[k, servo] = rad
    return times, angles


def main(argv=None):
    ap = argparse.ArgumentParser(description="Plot gait controller targets")
    ap.add_argument("--params", required=True)
    ap.add_argument("--seconds", type=float, default=c.STEP_LIMIT)
    ap.add_argument("--step", type=float, default=c.STEP)
    ap.add_argument("--out", default=os.path.join("data", "targetAngles.png"))
    args = ap.parse_args(argv)

    times, angles = target_angles(load_parameters(args.params), args.seconds, args.step)

    plt.figure(figsize=(10, 5))
    for servo in range(angles.shape[1]):
        plt.plot(times, angles[:, servo], label=f"servo {servo}", linewidth=1)
    plt.xlabel("time (s)")
    plt.ylabel("target angle (radians)")
    plt.title("Gait controller servo targets")
    plt.legend(ncol=2, fontsize="small")
    os.makedirs(os.path.dirname(args.out) or ".", exist_ok=True)
    plt.savefig(args.out, dpi=150, bbox_inches="tight")
    print("WROTE", args.out)


if __name__ == "__main__":
    main()
