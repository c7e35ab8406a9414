"""
Symbolicated output writer.

Writes are atomic (temp file in the destination directory, then
os.replace) and UTF-8. A failed write is logged and reported as False;
there is no user-facing error.
"""

import logging
import os
import tempfile

from ..errors import FileWriteError

logger = logging.getLogger(__name__)


def save_output(content: str, destination: str) -> bool:
    """
    Write `content` verbatim to `destination`.

    Missing parent directories are created.

    Returns:
        True if the file was written
    """
    destination = os.path.abspath(os.path.expanduser(destination))
    directory = os.path.dirname(destination)

    temp_path = None
    try:
        os.makedirs(directory, exist_ok=True)
        fd, temp_path = tempfile.mkstemp(prefix=".symbolicated-", dir=directory)
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        os.replace(temp_path, destination)
        temp_path = None
    except OSError as e:
        error = FileWriteError(f"{destination}: {e}")
        logger.error(f"[Writer] Failed: {error}")
        return False
    finally:
        if temp_path is not None and os.path.exists(temp_path):
            os.unlink(temp_path)

    logger.info(f"[Writer] Saved symbolicated crash log: {destination}")
    return True
