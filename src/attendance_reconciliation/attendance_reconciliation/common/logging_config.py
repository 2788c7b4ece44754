from __future__ import annotations

import logging
import sys
from typing import Any

# Package root logger, whatever import path the package was loaded under.
_LOGGER_PREFIX = __name__.rsplit(".common", 1)[0]
_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(*, level: int | str = logging.INFO, stream: Any = None) -> None:
    """Attach one stream handler to the package logger (idempotent)."""
    root_logger = logging.getLogger(_LOGGER_PREFIX)
    root_logger.setLevel(level)
    if root_logger.handlers:
        return

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT))
    root_logger.addHandler(handler)
    root_logger.propagate = False
