"""
Symbolication session: the interface front ends talk to.

A session wires ToolLocator, ArtifactResolver and Invoker together and
exposes what a drop-area UI needs:

    submit_file(path)      one dropped/opened file
    display()              text for each slot
    can_clear() / clear()
    can_invoke() / invoke(completion)
    suggested_output_name() / save_output(content, destination)

Front ends hold the session; the session never holds the front end.
The only link back is the completion callable passed to invoke().
"""

import logging
import os
from typing import FrozenSet, Iterable, List, Optional

from .artifacts.models import ResolverState
from .artifacts.resolver import ArtifactResolver
from .config import AssistantSettings, load_settings
from .deliver import naming, writer
from .execution.dispatch import Completion, CompletionDispatcher
from .execution.invoker import Invoker
from .paths import normalize_path, path_extension
from .presentation import SlotDisplay, describe_slots
from .search import DirectorySearch, strategy_for
from .toolchain import ToolLocator

logger = logging.getLogger(__name__)


class SymbolicationSession:
    def __init__(self, tool_locator: ToolLocator, resolver: ArtifactResolver, invoker: Invoker):
        self.tool_locator = tool_locator
        self.resolver = resolver
        self.invoker = invoker

    @classmethod
    def create(
        cls,
        settings: Optional[AssistantSettings] = None,
        dispatcher: Optional[CompletionDispatcher] = None,
    ) -> "SymbolicationSession":
        """
        Build a session and run toolchain discovery.

        Discovery failures do not raise; they leave supported_extensions
        empty and can_invoke() False.
        """
        settings = settings or load_settings()

        tool_locator = ToolLocator.from_settings(settings)
        tool_locator.locate()

        search = DirectorySearch(find_path=settings.find_path, select=strategy_for(settings.match_policy))
        resolver = ArtifactResolver(tool_locator, search)
        invoker = Invoker(tool_locator, resolver, dispatcher)
        return cls(tool_locator, resolver, invoker)

    @property
    def state(self) -> ResolverState:
        return self.resolver.state

    @property
    def supported_extensions(self) -> FrozenSet[str]:
        return self.tool_locator.supported_extensions

    def accepts(self, path: str) -> bool:
        return path_extension(path) in self.supported_extensions

    def submit_file(self, path: str) -> bool:
        """
        Offer one file to the resolver.

        The path is made absolute before it reaches the resolver.

        Returns:
            False if the extension is not (yet) accepted or the path does
            not exist
        """
        if not self.accepts(path):
            logger.info(f"[Session] Not accepted: {path}")
            return False
        if not os.path.exists(path):
            logger.info(f"[Session] Not found: {path}")
            return False
        self.resolver.classify_and_resolve(normalize_path(path))
        return True

    def submit_files(self, paths: Iterable[str]) -> List[str]:
        """Submit every path in order; returns the accepted ones."""
        return [path for path in paths if self.submit_file(path)]

    def display(self) -> SlotDisplay:
        return describe_slots(self.tool_locator.tool_path, self.resolver.state)

    def can_clear(self) -> bool:
        """False while symbolicatecrash is running."""
        return not self.running and self.resolver.can_clear()

    def can_invoke(self) -> bool:
        """False while symbolicatecrash is running."""
        return not self.running and self.resolver.can_invoke()

    def clear(self) -> None:
        if self.running:
            logger.warning("[Session] Symbolication running, not clearing")
            return
        self.resolver.clear()

    def invoke(self, completion: Completion, dispatcher: Optional[CompletionDispatcher] = None) -> bool:
        return self.invoker.invoke(completion, dispatcher)

    @property
    def running(self) -> bool:
        return self.invoker.in_flight

    def suggested_output_name(self) -> Optional[str]:
        crash_path = self.resolver.state.crash_path
        if crash_path is None:
            return None
        return naming.suggested_output_name(crash_path)

    def suggested_output_path(self) -> Optional[str]:
        crash_path = self.resolver.state.crash_path
        if crash_path is None:
            return None
        return naming.suggested_output_path(crash_path)

    def save_output(self, content: str, destination: str) -> bool:
        return writer.save_output(content, destination)

    def close(self) -> None:
        self.invoker.shutdown(wait=True)
