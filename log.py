"""log.py

Logging setup shared by the simulator modules.

Every module logs through ``logging.getLogger(__name__)``; entry points call
``configure_logging()`` once. ``SIM_DEBUG=1`` switches to DEBUG (the same switch
the old print banners used).
"""

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def debug_enabled():
    return os.getenv("SIM_DEBUG", "0") == "1"


def configure_logging(level=None):
    """Configure the root logger once; returns the level actually used."""
    if level is None:
        level = logging.DEBUG if debug_enabled() else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)
    return level
