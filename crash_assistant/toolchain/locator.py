"""
Xcode toolchain discovery.

Locates, once at startup:
1. The developer root, via `xcode-select -p`
   (e.g. /Applications/Xcode.app/Contents/Developer)
2. symbolicatecrash, via a search of <developerRoot>/../SharedFrameworks
   (e.g. .../SharedFrameworks/DVTFoundation.framework/Versions/A/Resources/symbolicatecrash)

Failures are logged and leave the slot absent. Nothing here raises to
the caller.
"""

import logging
import os
from typing import FrozenSet, Optional

from ..config import (
    SHARED_FRAMEWORKS_RELATIVE_PATH,
    SYMBOLICATION_TOOL_NAME,
    AssistantSettings,
)
from ..errors import CrashAssistantError, DeveloperRootNotFoundError, ToolNotFoundError
from ..execution.process import run_command
from ..models import ALL_SUPPORTED_EXTENSIONS
from ..paths import normalize_path
from ..search import DirectorySearch, EntryType, first_match

logger = logging.getLogger(__name__)


class ToolLocator:
    """
    Owner of the DEVELOPER_ROOT and SYMBOLICATION_TOOL slots.

    Usage:
        locator = ToolLocator()
        locator.locate()
        if locator.tool_path:
            ...
    """

    def __init__(
        self,
        xcode_select_path: str = "/usr/bin/xcode-select",
        search: Optional[DirectorySearch] = None,
        developer_dir_override: Optional[str] = None,
    ):
        self.xcode_select_path = xcode_select_path
        # Tool discovery always takes find's first match
        self.search = search or DirectorySearch(select=first_match)
        self.developer_dir_override = developer_dir_override
        self._developer_root: Optional[str] = None
        self._tool_path: Optional[str] = None

    @classmethod
    def from_settings(cls, settings: AssistantSettings) -> "ToolLocator":
        return cls(
            xcode_select_path=settings.xcode_select_path,
            search=DirectorySearch(find_path=settings.find_path, select=first_match),
            developer_dir_override=settings.developer_dir_override,
        )

    @property
    def developer_root(self) -> Optional[str]:
        return self._developer_root

    @property
    def tool_path(self) -> Optional[str]:
        return self._tool_path

    @property
    def supported_extensions(self) -> FrozenSet[str]:
        """
        Extensions the front end may accept.

        Empty until symbolicatecrash has been located: no files are
        accepted before the tool is actually usable.
        """
        if self._tool_path is None:
            return frozenset()
        return ALL_SUPPORTED_EXTENSIONS

    def locate(self) -> None:
        """Startup sequence: developer root first, then the tool."""
        self.locate_developer_root()
        self.locate_symbolication_tool()

    def locate_developer_root(self) -> None:
        """Find and store the developer root. Logs and returns on failure."""
        try:
            self._developer_root = self._query_developer_root()
        except CrashAssistantError as e:
            logger.warning(f"[ToolLocator] {e}")
            return
        logger.info(f"[ToolLocator] Developer root: {self._developer_root}")

    def locate_symbolication_tool(self) -> None:
        """
        Find and store symbolicatecrash.

        Silently does nothing when the developer root is unknown.
        """
        if self._developer_root is None:
            return

        frameworks_dir = normalize_path(
            os.path.join(self._developer_root, SHARED_FRAMEWORKS_RELATIVE_PATH)
        )
        try:
            self._tool_path = self.search.find_one(
                frameworks_dir, EntryType.FILE, SYMBOLICATION_TOOL_NAME
            )
        except CrashAssistantError as e:
            error = ToolNotFoundError(f"{SYMBOLICATION_TOOL_NAME} not found in {frameworks_dir} ({e.message})")
            logger.warning(f"[ToolLocator] {error}")
            return
        logger.info(f"[ToolLocator] {SYMBOLICATION_TOOL_NAME}: {self._tool_path}")

    def _query_developer_root(self) -> str:
        """
        Resolve the developer root.

        An existing CRASH_ASSISTANT_DEVELOPER_DIR wins; otherwise
        `xcode-select -p` is asked and its first stdout line is used.

        Raises:
            DeveloperRootNotFoundError: On non-zero exit or empty output
        """
        if self.developer_dir_override:
            override = normalize_path(self.developer_dir_override)
            if os.path.isdir(override):
                return override
            logger.warning(f"[ToolLocator] Ignoring developer dir override, not a directory: {override}")

        result = run_command(self.xcode_select_path, ["-p"])
        if result.exit_status != 0:
            raise DeveloperRootNotFoundError(
                f"{self.xcode_select_path} -p failed (exit={result.exit_status}): {result.stderr}"
            )
        line = result.first_stdout_line()
        if line is None:
            raise DeveloperRootNotFoundError(f"{self.xcode_select_path} -p printed no path")
        return normalize_path(line)
