import json

import numpy as np
import pytest

pytest.importorskip("matplotlib")

from generate import SERVO_NAMES
from plot_targetAngles import main, target_angles


def test_target_angles_shape_and_mirrors():
    genes = [0.5, 0.1, 0.6] * 10 + [0.5]
    times, angles = target_angles(genes, seconds=0.4, step=0.008)
    assert angles.shape == (50, len(SERVO_NAMES))
    assert times[0] == pytest.approx(0.008)
    assert np.allclose(angles[:, 6], angles[:, 10])
    assert np.allclose(angles[:, 9], angles[:, 13])


def test_main_writes_png(tmp_path):
    params = tmp_path / "genes.json"
    params.write_text(json.dumps([0.5] * 31))
    out = tmp_path / "plot.png"
    main(["--params", str(params), "--seconds", "0.2", "--out", str(out)])
    assert out.exists()
