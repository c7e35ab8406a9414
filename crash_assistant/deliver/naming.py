"""
Output file naming.

The suggested name keeps the crash log's extension so the result opens
with the same viewer:

    /x/MyApp-2017-01-07.crash -> MyApp-2017-01-07.symbolicated.crash
    /x/report                 -> report.symbolicated
"""

import os

SYMBOLICATED_MARKER = "symbolicated"


def suggested_output_name(crash_log_path: str) -> str:
    """Suggested file name (no directory) for a symbolicated crash log."""
    base_name = os.path.basename(crash_log_path.rstrip(os.sep))
    stem, extension = os.path.splitext(base_name)
    if not extension:
        return f"{stem}.{SYMBOLICATED_MARKER}"
    return f"{stem}.{SYMBOLICATED_MARKER}{extension}"


def suggested_output_path(crash_log_path: str) -> str:
    """Suggested name placed next to the crash log."""
    directory = os.path.dirname(crash_log_path.rstrip(os.sep))
    return os.path.join(directory, suggested_output_name(crash_log_path))
