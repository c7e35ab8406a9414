"""
First-run readiness of the Xcode toolchain.
"""

from .checks import (
    ReadinessCheck,
    CheckResult,
    CheckStatus,
    check_python_version,
    check_developer_root,
    check_symbolication_tool,
    check_search_tool,
    run_all_checks,
    is_ready,
)

from .report import (
    ReadinessReport,
    generate_readiness_report,
    format_readiness_terminal,
)

__all__ = [
    "ReadinessCheck",
    "CheckResult",
    "CheckStatus",
    "check_python_version",
    "check_developer_root",
    "check_symbolication_tool",
    "check_search_tool",
    "run_all_checks",
    "is_ready",
    "ReadinessReport",
    "generate_readiness_report",
    "format_readiness_terminal",
]
