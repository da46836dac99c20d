from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass
class TelemetryLogger:
    out_dir: Path
    every: int = 10
    run_id: str = "run0"
    enabled: bool = True

    _fp: Optional[Any] = field(default=None, init=False, repr=False)
    _t0_pos: Optional[Tuple[float, float, float]] = field(default=None, init=False)
    _last_pos: Optional[Tuple[float, float, float]] = field(default=None, init=False)
    _last_clock: float = field(default=0.0, init=False)
    _steps: int = field(default=0, init=False)
    _lines: int = field(default=0, init=False)
    _max_z: float = field(default=float("-inf"), init=False)

    def __post_init__(self):
        self.out_dir = Path(self.out_dir)
        if not self.enabled:
            return
        self.out_dir.mkdir(parents=True, exist_ok=True)
        self._fp = open(self.out_dir / "telemetry.jsonl", "w", encoding="utf-8")

    def start(self, position):
        if self._t0_pos is None:
            self._t0_pos = tuple(float(v) for v in position)
            self._last_pos = self._t0_pos

    def log_step(self, t: int, clock: float, position, targets: Dict[int, float]):
        if not self.enabled:
            return

        pos = tuple(float(v) for v in position)
        self.start(pos)
        self._last_pos = pos
        self._last_clock = float(clock)
        self._max_z = max(self._max_z, pos[2])
        self._steps += 1

        if self.every > 1 and (t % self.every) != 0:
            return

        rec: Dict[str, Any] = {
            "t": int(t),
            "clock": float(clock),
            "base": {"x": pos[0], "y": pos[1], "z": pos[2]},
            "targets": {str(k): float(v) for k, v in sorted(targets.items())},
        }
        self._fp.write(json.dumps(rec) + "\n")
        self._lines += 1

    def finalize(self, fitness=None):
        if not self.enabled or self._fp is None:
            return None

        pos = self._last_pos
        dx = dy = dz = None
        if self._t0_pos is not None and pos is not None:
            dx = pos[0] - self._t0_pos[0]
            dy = pos[1] - self._t0_pos[1]
            dz = pos[2] - self._t0_pos[2]

        summary = {
            "run_id": self.run_id,
            "steps": self._steps,
            "lines": self._lines,
            "clock": self._last_clock,
            "start": self._t0_pos,
            "end": pos,
            "delta": {"dx": dx, "dy": dy, "dz": dz},
            "max_z": self._max_z if self._steps else None,
            "fitness": fitness,
        }
        (self.out_dir / "summary.json").write_text(json.dumps(summary, indent=2), encoding="utf-8")
        self._fp.close()
        self._fp = None
        logger.debug("telemetry written to %s", self.out_dir)
        return summary
