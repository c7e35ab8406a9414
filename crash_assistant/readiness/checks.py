"""
Xcode toolchain readiness checks.

A check is a plain function `(locator, settings) -> CheckResult`. Checks
only read what discovery already found; they never run xcode-select or
find themselves, so a report always describes the live session.
"""

import os
import sys
from enum import Enum
from typing import Callable, List, Optional

from pydantic import BaseModel, ConfigDict

from ..config import ENV_FIND, SYMBOLICATION_TOOL_NAME, AssistantSettings
from ..toolchain import ToolLocator


class CheckStatus(str, Enum):
    PASS = "pass"
    FAIL = "fail"


class CheckResult(BaseModel):
    """Outcome of one check. `hint` is remediation text shown on failure."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    status: CheckStatus
    message: str
    hint: Optional[str] = None

    @property
    def passed(self) -> bool:
        return self.status == CheckStatus.PASS

    @property
    def blocking(self) -> bool:
        return self.id in BLOCKING_CHECKS

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", exclude_none=True)


ReadinessCheck = Callable[[ToolLocator, AssistantSettings], CheckResult]


MINIMUM_PYTHON_VERSION = (3, 9)


def _outcome(check_id: str, passed: bool, message: str, hint: Optional[str] = None) -> CheckResult:
    return CheckResult(
        id=check_id,
        status=CheckStatus.PASS if passed else CheckStatus.FAIL,
        message=message,
        hint=None if passed else hint,
    )


def check_python_version(locator: ToolLocator, settings: AssistantSettings) -> CheckResult:
    current = "%d.%d" % sys.version_info[:2]
    minimum = "%d.%d" % MINIMUM_PYTHON_VERSION
    return _outcome(
        "python_version",
        sys.version_info[:2] >= MINIMUM_PYTHON_VERSION,
        f"Python {current} (minimum: {minimum})",
        hint=f"Install Python {minimum} or later",
    )


def check_developer_root(locator: ToolLocator, settings: AssistantSettings) -> CheckResult:
    """xcode-select reported a developer directory."""
    root = locator.developer_root
    return _outcome(
        "developer_root_located",
        bool(root),
        f"Developer directory: {root}" if root
        else f"{settings.xcode_select_path} -p did not report a developer directory",
        hint="Install Xcode, then run: sudo xcode-select -s /Applications/Xcode.app",
    )


def check_symbolication_tool(locator: ToolLocator, settings: AssistantSettings) -> CheckResult:
    """symbolicatecrash was found under SharedFrameworks."""
    if locator.tool_path:
        message = f"{SYMBOLICATION_TOOL_NAME}: {locator.tool_path}"
    elif not locator.developer_root:
        message = f"{SYMBOLICATION_TOOL_NAME} not searched (no developer directory)"
    else:
        message = f"{SYMBOLICATION_TOOL_NAME} not found next to {locator.developer_root}"
    return _outcome(
        "symbolication_tool_located",
        bool(locator.tool_path),
        message,
        hint="A full Xcode install is required; Command Line Tools alone do not ship symbolicatecrash",
    )


def check_search_tool(locator: ToolLocator, settings: AssistantSettings) -> CheckResult:
    """find is present; bundle expansion depends on it."""
    path = settings.find_path
    usable = os.path.isfile(path) and os.access(path, os.X_OK)
    return _outcome(
        "search_tool_available",
        usable,
        f"find: {path}" if usable else f"find not executable at {path}",
        hint=f"Set {ENV_FIND} to the find binary",
    )


ALL_CHECKS: List[ReadinessCheck] = [
    check_python_version,
    check_developer_root,
    check_symbolication_tool,
    check_search_tool,
]

# symbolication cannot run unless these pass
BLOCKING_CHECKS = {
    "developer_root_located",
    "symbolication_tool_located",
    "search_tool_available",
}


def run_all_checks(locator: ToolLocator, settings: AssistantSettings) -> List[CheckResult]:
    """
    Run all readiness checks and return results.

    A check that raises is reported as a failure rather than aborting
    the report.
    """
    results = []
    for check in ALL_CHECKS:
        try:
            results.append(check(locator, settings))
        except Exception as e:
            results.append(_outcome(check.__name__.replace("check_", "", 1), False, f"Check raised: {e}"))
    return results


def is_ready(results: List[CheckResult]) -> bool:
    """Ready when every blocking check passed."""
    return not any(result.blocking and not result.passed for result in results)
