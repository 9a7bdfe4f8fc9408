"""Logging setup shared by the search pipeline."""
from __future__ import annotations

import logging
import sys

from jobsearch.settings import settings

_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
_DATE_FMT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str) -> logging.Logger:
    """Return a named logger under the ``jobsearch`` root, configuring it once."""
    root = logging.getLogger("jobsearch")
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FMT))
        root.addHandler(handler)
        root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    return logging.getLogger(name)
