from __future__ import annotations

import logging
import sys

FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def get_logger(name: str, level: str = "INFO") -> logging.Logger:
    """Named logger writing to stderr. stdout is reserved for command output."""
    log = logging.getLogger(name)
    if not log.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(FORMAT))
        log.addHandler(handler)
        log.propagate = False
    log.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    return log
