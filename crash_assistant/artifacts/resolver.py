"""
Artifact resolution from dropped files.

Classifies one path by its (lowercased) extension and records the most
specific artifact path found:

    .xcarchive    Products/**/*.app        -> app
                  dSYMs/**/*.app.dSYM      -> dsym   (independent of app search)
    .xccrashpoint DistributionInfos/**/*.crash -> crash
    .app          stored as app
    .dsym         stored as dsym
    .crash        stored as crash
    anything else ignored

Container bundles expand by exactly one search per artifact kind.
Only the outermost extension of the dropped path is considered.
"""

import logging
import os
from typing import Callable, Dict, Optional

from ..errors import CrashAssistantError
from ..models import SupportedInputExtension
from ..paths import path_extension
from ..search import DirectorySearch, EntryType
from ..toolchain import ToolLocator
from .models import ResolverState

logger = logging.getLogger(__name__)


# Container layouts produced by Xcode Organizer
ARCHIVE_PRODUCTS_DIR = "Products"
ARCHIVE_DSYMS_DIR = "dSYMs"
CRASHPOINT_LOGS_DIR = "DistributionInfos"

APP_PATTERN = "*.app"
DSYM_PATTERN = "*.app.dSYM"
CRASH_PATTERN = "*.crash"


class ArtifactResolver:
    """
    Owner of the APP_BUNDLE, DEBUG_SYMBOL_BUNDLE and CRASH_LOG slots.

    All mutation happens on the caller's thread; no locking.
    """

    def __init__(self, tool_locator: ToolLocator, search: Optional[DirectorySearch] = None):
        self.tool_locator = tool_locator
        self.search = search or DirectorySearch()
        self.state = ResolverState()
        self._dispatch: Dict[str, Callable[[str], None]] = {
            SupportedInputExtension.XCARCHIVE.value: self.resolve_archive,
            SupportedInputExtension.XCCRASHPOINT.value: self.resolve_crash_point,
            SupportedInputExtension.APP.value: self.store_app,
            SupportedInputExtension.DSYM.value: self.store_dsym,
            SupportedInputExtension.CRASH.value: self.store_crash,
        }

    def classify_and_resolve(self, path: str) -> None:
        """Dispatch `path` on its extension. Unknown extensions are a no-op."""
        handler = self._dispatch.get(path_extension(path))
        if handler is None:
            logger.debug(f"[Resolver] Ignoring unsupported file: {path}")
            return
        handler(path)

    def resolve_archive(self, path: str) -> None:
        """Pull the app and its dSYM out of an .xcarchive."""
        app = self._search(os.path.join(path, ARCHIVE_PRODUCTS_DIR), EntryType.DIRECTORY, APP_PATTERN)
        if app is not None:
            self.store_app(app)

        dsym = self._search(os.path.join(path, ARCHIVE_DSYMS_DIR), EntryType.DIRECTORY, DSYM_PATTERN)
        if dsym is not None:
            self.store_dsym(dsym)

    def resolve_crash_point(self, path: str) -> None:
        """Pull a raw crash log out of an .xccrashpoint."""
        crash = self._search(os.path.join(path, CRASHPOINT_LOGS_DIR), EntryType.FILE, CRASH_PATTERN)
        if crash is not None:
            self.store_crash(crash)

    def store_app(self, path: str) -> None:
        self.state.app_path = path
        logger.info(f"[Resolver] app: {path}")

    def store_dsym(self, path: str) -> None:
        self.state.dsym_path = path
        logger.info(f"[Resolver] dsym: {path}")

    def store_crash(self, path: str) -> None:
        self.state.crash_path = path
        logger.info(f"[Resolver] crash: {path}")

    def can_clear(self) -> bool:
        return not self.state.is_empty

    def can_invoke(self) -> bool:
        """Tool located and a crash log known; app and dSYM are optional."""
        return self.tool_locator.tool_path is not None and self.state.crash_path is not None

    def clear(self) -> None:
        """Forget dropped artifacts. Toolchain slots are never cleared."""
        self.state = ResolverState()
        logger.info("[Resolver] Cleared")

    def _search(self, directory: str, entry_type: EntryType, pattern: str) -> Optional[str]:
        try:
            return self.search.find_one(directory, entry_type, pattern)
        except CrashAssistantError as e:
            logger.warning(f"[Resolver] {e}")
            return None
