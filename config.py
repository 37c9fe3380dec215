"""
config.py — Runtime configuration
==================================
Everything tunable comes from VISUALIZER_* environment variables, read
once at startup by load_config().
"""

import os
import secrets
from dataclasses import dataclass


@dataclass
class AppConfig:
    secret_key:    str
    host:          str
    port:          int
    debug:         bool
    log_level:     str
    default_speed: int
    max_nodes:     int      # caps graph size; Floyd-Warshall emits O(n³) steps
    max_items:     int
    max_sessions:  int      # least recently used sessions are dropped past this


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def load_config() -> AppConfig:
    return AppConfig(
        secret_key=os.getenv("VISUALIZER_SECRET_KEY") or secrets.token_hex(32),
        host=os.getenv("VISUALIZER_HOST", "0.0.0.0"),
        port=int(os.getenv("VISUALIZER_PORT", "5000")),
        debug=_flag("VISUALIZER_DEBUG", "false"),
        log_level=os.getenv("VISUALIZER_LOG_LEVEL", "INFO").upper(),
        default_speed=int(os.getenv("VISUALIZER_DEFAULT_SPEED", "50")),
        max_nodes=int(os.getenv("VISUALIZER_MAX_NODES", "15")),
        max_items=int(os.getenv("VISUALIZER_MAX_ITEMS", "20")),
        max_sessions=int(os.getenv("VISUALIZER_MAX_SESSIONS", "256")),
    )
