"""
Completion delivery back to the caller's context.

The symbolication subprocess runs on a worker thread, but the completion
must run where the caller lives, so front-end state is only ever touched
from one thread. A dispatcher is that "where":

- QueueDispatcher: the owning thread drains a queue (CLI)
- EventLoopDispatcher: asyncio loop.call_soon_threadsafe (HTTP service)
- ImmediateDispatcher: run on the worker itself (scripts, tests)
"""

import asyncio
import queue
from abc import ABC, abstractmethod
from typing import Callable, Optional

Completion = Callable[[Optional[str]], None]


class CompletionDispatcher(ABC):
    """Delivers one completion value to its callback on some context."""

    @abstractmethod
    def post(self, completion: Completion, value: Optional[str]) -> None:
        """Schedule `completion(value)`. Called from the worker thread."""


class ImmediateDispatcher(CompletionDispatcher):
    def post(self, completion: Completion, value: Optional[str]) -> None:
        completion(value)


class QueueDispatcher(CompletionDispatcher):
    """
    Queue drained by the thread that owns the front end.

    Usage:
        dispatcher = QueueDispatcher()
        invoker.invoke(on_done)
        dispatcher.drain()   # runs on_done here, on this thread
    """

    def __init__(self):
        self._pending: "queue.Queue[tuple[Completion, Optional[str]]]" = queue.Queue()

    def post(self, completion: Completion, value: Optional[str]) -> None:
        self._pending.put((completion, value))

    def drain(self, block: bool = True, timeout: Optional[float] = None) -> int:
        """
        Run delivered completions on the calling thread.

        Args:
            block: Wait for at least one delivery before returning
            timeout: Upper bound on that wait (None = forever)

        Returns:
            Number of completions run
        """
        ran = 0
        if block:
            try:
                completion, value = self._pending.get(timeout=timeout)
            except queue.Empty:
                return 0
            completion(value)
            ran += 1
        while True:
            try:
                completion, value = self._pending.get_nowait()
            except queue.Empty:
                return ran
            completion(value)
            ran += 1


class EventLoopDispatcher(CompletionDispatcher):
    """Hands completions to an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop):
        self.loop = loop

    def post(self, completion: Completion, value: Optional[str]) -> None:
        self.loop.call_soon_threadsafe(completion, value)
