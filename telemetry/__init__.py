"""
telemetry: optional per-run traces for SIMULATION.

Components:
    logger.py   TelemetryLogger: telemetry.jsonl (one line every N steps) + summary.json

Enable with TELEMETRY=1 (see config.py) or SimulationConfig(telemetry=True).
"""
