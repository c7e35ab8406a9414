"""
symbolicatecrash invocation.

Design rules:
- argv is `[--dsym=<dsym>] <crash> [<app>]`, in that fixed order
- DEVELOPER_DIR is set only when a developer root was located
- The subprocess runs on a single background worker; the caller never blocks
- The completion runs exactly once, after the process exits and both
  streams are drained, on the dispatcher's context
- stdout presence decides success; the exit status is diagnostic only
- At most one invocation in flight; overlapping calls get None
- No cancellation, no timeout
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, List, Optional

from ..artifacts.resolver import ArtifactResolver
from ..config import DEVELOPER_DIR_VARIABLE
from ..toolchain import ToolLocator
from .dispatch import Completion, CompletionDispatcher, ImmediateDispatcher
from .process import run_command
from .results import CommandResult

logger = logging.getLogger(__name__)

CommandRunner = Callable[[str, List[str], Dict[str, str]], CommandResult]


class Invoker:
    """
    Runs symbolicatecrash from the current toolchain + resolver state.

    Args:
        tool_locator: Source of the tool path and developer root
        resolver: Source of the app / dSYM / crash paths
        dispatcher: Where completions are delivered
        runner: Blocking command runner (run_command by default)
    """

    def __init__(
        self,
        tool_locator: ToolLocator,
        resolver: ArtifactResolver,
        dispatcher: Optional[CompletionDispatcher] = None,
        runner: CommandRunner = run_command,
    ):
        self.tool_locator = tool_locator
        self.resolver = resolver
        self.dispatcher = dispatcher or ImmediateDispatcher()
        self.runner = runner
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="symbolicatecrash")
        self._lock = threading.Lock()
        self._in_flight = False

    @property
    def in_flight(self) -> bool:
        with self._lock:
            return self._in_flight

    def build_arguments(self) -> List[str]:
        state = self.resolver.state
        arguments = []
        if state.dsym_path is not None:
            arguments.append(f"--dsym={state.dsym_path}")
        if state.crash_path is not None:
            arguments.append(state.crash_path)
        if state.app_path is not None:
            arguments.append(state.app_path)
        return arguments

    def build_environment(self) -> Dict[str, str]:
        developer_root = self.tool_locator.developer_root
        if developer_root is None:
            return {}
        return {DEVELOPER_DIR_VARIABLE: developer_root}

    def invoke(self, completion: Completion, dispatcher: Optional[CompletionDispatcher] = None) -> bool:
        """
        Start symbolication in the background.

        Without a located tool, or while another run is in flight,
        `completion(None)` is called right away on the caller's thread and
        nothing is launched.

        Args:
            completion: Receives stdout text, or None
            dispatcher: Delivery context for this call (default: the invoker's)

        Returns:
            True if a subprocess was scheduled
        """
        tool_path = self.tool_locator.tool_path
        if tool_path is None:
            completion(None)
            return False

        with self._lock:
            if self._in_flight:
                logger.warning("[Invoker] Symbolication already running, ignoring request")
                rejected = True
            else:
                self._in_flight = True
                rejected = False
        if rejected:
            completion(None)
            return False

        arguments = self.build_arguments()
        environment = self.build_environment()
        logger.info(f"[Invoker] Running {tool_path} {' '.join(arguments)}")
        self._executor.submit(
            self._run, tool_path, arguments, environment, completion, dispatcher or self.dispatcher
        )
        return True

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def _run(
        self,
        tool_path: str,
        arguments: List[str],
        environment: Dict[str, str],
        completion: Completion,
        dispatcher: CompletionDispatcher,
    ) -> None:
        output = None
        try:
            output = self._interpret(self.runner(tool_path, arguments, environment))
        except Exception:
            logger.exception("[Invoker] Unexpected failure while running symbolicatecrash")
        finally:
            with self._lock:
                self._in_flight = False
        dispatcher.post(completion, output)

    @staticmethod
    def _interpret(result: CommandResult) -> Optional[str]:
        if result.stdout is None:
            logger.warning(f"[Invoker] Failed: {result.stderr}")
            return None
        if result.stderr:
            logger.warning(f"[Invoker] Warning: {result.stderr}")
        return result.stdout
