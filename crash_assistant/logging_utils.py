"""
Logging setup shared by the CLI and the HTTP service.

Diagnostics always go to stderr so that symbolicated output printed to
stdout stays clean.
"""

import logging
import sys
from typing import Union

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"


def configure_logging(level: Union[str, int] = "INFO") -> None:
    """
    Configure root logging once per process.

    Unknown level names fall back to INFO instead of raising.
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            resolved = logging.INFO
    else:
        resolved = level

    logging.basicConfig(
        level=resolved,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        stream=sys.stderr,
        force=True,
    )
