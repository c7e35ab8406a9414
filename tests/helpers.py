"""
Stand-ins for Xcode command line tools.
"""

import shutil
from pathlib import Path

FIND = shutil.which("find") or "/usr/bin/find"

TOOL_RELATIVE_PATH = "SharedFrameworks/DVTFoundation.framework/Versions/A/Resources/symbolicatecrash"

FAKE_SYMBOLICATECRASH = """\
echo "DEVELOPER_DIR=$DEVELOPER_DIR"
for arg in "$@"; do
  echo "ARG:$arg"
done
"""


def write_script(path: Path, body: str) -> Path:
    """Write an executable /bin/sh script."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("#!/bin/sh\n" + body)
    path.chmod(0o755)
    return path
