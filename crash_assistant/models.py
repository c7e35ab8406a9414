"""
Shared vocabulary: artifact kinds and recognized input extensions.
"""

from enum import Enum
from typing import FrozenSet


class ArtifactKind(str, Enum):
    """
    Every path slot the assistant tracks.

    DEVELOPER_ROOT and SYMBOLICATION_TOOL are owned by ToolLocator and are
    fixed after startup. The other three are owned by ArtifactResolver.
    """

    DEVELOPER_ROOT = "developer_root"
    SYMBOLICATION_TOOL = "symbolication_tool"
    APP_BUNDLE = "app"
    DEBUG_SYMBOL_BUNDLE = "dsym"
    CRASH_LOG = "crash"


class SupportedInputExtension(str, Enum):
    """
    Extensions accepted from drag-and-drop / the command line.

    Values are lowercase; comparison is always case-insensitive
    ("Foo.app.dSYM" is a dsym).
    """

    XCARCHIVE = "xcarchive"
    XCCRASHPOINT = "xccrashpoint"
    APP = "app"
    DSYM = "dsym"
    CRASH = "crash"


ALL_SUPPORTED_EXTENSIONS: FrozenSet[str] = frozenset(ext.value for ext in SupportedInputExtension)
