import logging

from log import configure_logging


def test_sim_debug_switches_level(monkeypatch):
    monkeypatch.setenv("SIM_DEBUG", "1")
    assert configure_logging() == logging.DEBUG
    monkeypatch.setenv("SIM_DEBUG", "0")
    assert configure_logging() == logging.INFO
    assert logging.getLogger().level == logging.INFO
