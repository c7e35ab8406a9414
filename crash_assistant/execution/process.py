"""
Blocking subprocess runner.

Design rules:
- One call = one process, run to completion
- stdout and stderr are drained fully (no streaming)
- No timeout, no retry
- Launch and decode failures are logged and absorbed into CommandResult
- Non-zero exit is logged, never raised
"""

import logging
import os
import subprocess
from typing import Dict, List, Optional

from ..errors import OutputDecodeError, SubprocessLaunchError, SubprocessNonZeroExitError
from .results import CommandResult

logger = logging.getLogger(__name__)


def _decode(data: bytes, command: str, stream: str) -> Optional[str]:
    """Decode captured bytes as UTF-8, None if they are not valid UTF-8."""
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        error = OutputDecodeError(f"{command}: {stream} is not valid UTF-8 ({e.reason})")
        logger.warning(f"[Process] {error}")
        return None


def run_command(
    command: str,
    arguments: Optional[List[str]] = None,
    environment: Optional[Dict[str, str]] = None,
) -> CommandResult:
    """
    Run `command` with `arguments` and capture both output streams.

    Args:
        command: Absolute path to the executable
        arguments: Argument list (argv[1:])
        environment: Variables layered over the inherited environment

    Returns:
        CommandResult. Never raises for launch, exit or decode failures.
    """
    argv = [command] + list(arguments or [])

    env = None
    if environment:
        env = dict(os.environ)
        env.update(environment)

    logger.debug(f"[Process] Running: {' '.join(argv)}")

    try:
        completed = subprocess.run(
            argv,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            env=env,
            check=False,
        )
    except OSError as e:
        error = SubprocessLaunchError(f"{command}: {e}")
        logger.warning(f"[Process] {error}")
        return CommandResult()

    if completed.returncode != 0:
        error = SubprocessNonZeroExitError(
            f"{command} exited with terminationStatus={completed.returncode}"
        )
        logger.info(f"[Process] {error}")

    return CommandResult(
        stdout=_decode(completed.stdout, command, "stdout"),
        stderr=_decode(completed.stderr, command, "stderr"),
        exit_status=completed.returncode,
    )
