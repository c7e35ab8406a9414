"""
Crash Assistant failure taxonomy.

Every failure in discovery, search, invocation and saving is ABSORBED
where it happens: logged, then represented as an absent value in the
affected slot. These exceptions exist so internal helpers can signal a
specific failure to the public operation that absorbs it.

None of them ever reaches the collaborator (CLI / HTTP layer).
The only user-visible signals are:
- a capability predicate staying False
- a completion receiving None
- save_output() returning False
"""

from enum import Enum


class FailureKind(str, Enum):
    """Classification of absorbed failures, used in diagnostics."""

    DEVELOPER_ROOT_NOT_FOUND = "DEVELOPER_ROOT_NOT_FOUND"
    """xcode-select failed or printed nothing"""

    TOOL_NOT_FOUND = "TOOL_NOT_FOUND"
    """symbolicatecrash not present under SharedFrameworks"""

    SEARCH_PRODUCED_NO_MATCH = "SEARCH_PRODUCED_NO_MATCH"
    """find printed no candidate for a nested artifact"""

    SUBPROCESS_LAUNCH_FAILURE = "SUBPROCESS_LAUNCH_FAILURE"
    """Executable missing, not executable, or OS refused to spawn"""

    SUBPROCESS_NON_ZERO_EXIT = "SUBPROCESS_NON_ZERO_EXIT"
    """Process ran but exited non-zero (diagnostic only)"""

    OUTPUT_DECODE_FAILURE = "OUTPUT_DECODE_FAILURE"
    """Captured bytes were not valid UTF-8"""

    FILE_WRITE_FAILURE = "FILE_WRITE_FAILURE"
    """Symbolicated output could not be written"""


class CrashAssistantError(Exception):
    """
    Base exception for all absorbed failures.

    Subclasses set `kind` so log lines carry a stable classification.
    """

    kind: FailureKind

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


class DeveloperRootNotFoundError(CrashAssistantError):
    kind = FailureKind.DEVELOPER_ROOT_NOT_FOUND


class ToolNotFoundError(CrashAssistantError):
    kind = FailureKind.TOOL_NOT_FOUND


class SearchProducedNoMatchError(CrashAssistantError):
    kind = FailureKind.SEARCH_PRODUCED_NO_MATCH


class SubprocessLaunchError(CrashAssistantError):
    kind = FailureKind.SUBPROCESS_LAUNCH_FAILURE


class SubprocessNonZeroExitError(CrashAssistantError):
    kind = FailureKind.SUBPROCESS_NON_ZERO_EXIT


class OutputDecodeError(CrashAssistantError):
    kind = FailureKind.OUTPUT_DECODE_FAILURE


class FileWriteError(CrashAssistantError):
    kind = FailureKind.FILE_WRITE_FAILURE
