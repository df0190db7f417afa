# gearshare/utils/logging.py
import logging
import sys

from gearshare.utils.settings import LOG_LEVEL

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _root() -> logging.Logger:
    root = logging.getLogger("gearshare")
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(handler)
        root.setLevel(LOG_LEVEL.upper())
    return root


def get_logger(name: str) -> logging.Logger:
    _root()
    return logging.getLogger(name)
