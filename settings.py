"""
settings.py — Runtime Configuration
====================================
Module-level constants read by the engine and the Flask app.  The few
values that vary per deployment come from the environment:

    ALGOVIZ_LOG_LEVEL    logging level name          (default INFO)
    ALGOVIZ_SECRET_KEY   Flask session signing key   (default random)
    ALGOVIZ_SESSIONS     playback sessions kept      (default 256)
"""

import logging
import os
import secrets
import sys


# ---------------------------------------------------------------------------
# Playback speed (milliseconds per step)
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":   1000,   # teaching mode
    "medium": 400,
    "fast":   150,    # demo mode
    "turbo":  50,
}
DEFAULT_SPEED_MS = 1000
MIN_SPEED_MS     = 20

# ---------------------------------------------------------------------------
# Operation history & random graphs
# ---------------------------------------------------------------------------
HISTORY_LIMIT       = 20
RANDOM_GRAPH_NODES  = (6, 9)
RANDOM_WEIGHT_RANGE = (1, 10)

# largest n the sieve route accepts
SIEVE_LIMIT = 200

# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------
LOG_LEVEL  = os.environ.get("ALGOVIZ_LOG_LEVEL", "INFO").upper()
SECRET_KEY = os.environ.get("ALGOVIZ_SECRET_KEY") or secrets.token_hex(32)
SESSION_LIMIT = int(os.environ.get("ALGOVIZ_SESSIONS", "256"))

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(level: str = None) -> logging.Logger:
    """Attach a stream handler to the root logger (once) and set its level."""
    root = logging.getLogger()
    root.setLevel(getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO))

    if not any(getattr(h, "_algoviz", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._algoviz = True
        root.addHandler(handler)
    return root


def flask_config() -> dict:
    """Mapping handed to app.config.from_mapping()."""
    return {
        "SECRET_KEY":       SECRET_KEY,
        "SPEED_PRESETS":    dict(SPEED_PRESETS),
        "DEFAULT_SPEED_MS": DEFAULT_SPEED_MS,
        "MIN_SPEED_MS":     MIN_SPEED_MS,
        "HISTORY_LIMIT":    HISTORY_LIMIT,
        "RANDOM_GRAPH_NODES":  RANDOM_GRAPH_NODES,
        "RANDOM_WEIGHT_RANGE": RANDOM_WEIGHT_RANGE,
        "SIEVE_LIMIT":      SIEVE_LIMIT,
        "SESSION_LIMIT":    SESSION_LIMIT,
    }
