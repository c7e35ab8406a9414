"""
Readiness report: check results plus a verdict, as JSON or terminal text.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List

from .. import __version__
from ..config import AssistantSettings
from ..toolchain import ToolLocator
from .checks import CheckResult, is_ready, run_all_checks


@dataclass
class ReadinessReport:
    version: str
    ready: bool
    checks: List[CheckResult]
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    @property
    def blocking_failed_checks(self) -> List[CheckResult]:
        return [c for c in self.checks if c.blocking and not c.passed]

    @property
    def total_failures(self) -> int:
        return sum(not c.passed for c in self.checks)

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "ready": self.ready,
            "timestamp": self.timestamp,
            "summary": {
                "total_checks": len(self.checks),
                "passed": len(self.checks) - self.total_failures,
                "failed": self.total_failures,
                "blocking_failures": len(self.blocking_failed_checks),
            },
            "checks": [c.to_dict() for c in self.checks],
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


def generate_readiness_report(locator: ToolLocator, settings: AssistantSettings) -> ReadinessReport:
    checks = run_all_checks(locator, settings)
    return ReadinessReport(version=__version__, ready=is_ready(checks), checks=checks)


def format_readiness_terminal(report: ReadinessReport) -> str:
    """
    One line per check, ids aligned, hints indented under failures:

        crash-assistant 1.0.0 readiness

        ✔ python_version              Python 3.12 (minimum: 3.9)
        ✘ symbolication_tool_located  symbolicatecrash not found ...  [BLOCKING]
                                      hint: A full Xcode install is required ...

        ✘ NOT READY (1 blocking)
    """
    width = max((len(c.id) for c in report.checks), default=0)
    lines = [f"crash-assistant {report.version} readiness", ""]

    for check in report.checks:
        mark = "✔" if check.passed else "✘"
        tag = "  [BLOCKING]" if check.blocking and not check.passed else ""
        lines.append(f"{mark} {check.id:<{width}}  {check.message}{tag}")
        if check.hint:
            lines.append(f"  {'':<{width}}  hint: {check.hint}")

    lines.append("")
    blocking = len(report.blocking_failed_checks)
    if not report.ready:
        lines.append(f"✘ NOT READY ({blocking} blocking)")
    elif report.total_failures:
        lines.append(f"✔ READY ({report.total_failures} non-blocking failure(s))")
    else:
        lines.append("✔ READY")

    return "\n".join(lines) + "\n"
