"""
Crash Assistant configuration.

Settings are read once at startup from environment variables.
Every override is OPTIONAL; the defaults match a stock macOS + Xcode install.

Environment variables:
    CRASH_ASSISTANT_XCODE_SELECT   Path to xcode-select (default /usr/bin/xcode-select)
    CRASH_ASSISTANT_FIND           Path to find (default /usr/bin/find)
    CRASH_ASSISTANT_DEVELOPER_DIR  Pre-seeded developer directory (skips xcode-select)
    CRASH_ASSISTANT_MATCH_POLICY   "first" | "newest" (default "first")
    CRASH_ASSISTANT_LOG_LEVEL      Logging level name (default "INFO")
"""

import os
from enum import Enum
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict


ENV_XCODE_SELECT = "CRASH_ASSISTANT_XCODE_SELECT"
ENV_FIND = "CRASH_ASSISTANT_FIND"
ENV_DEVELOPER_DIR = "CRASH_ASSISTANT_DEVELOPER_DIR"
ENV_MATCH_POLICY = "CRASH_ASSISTANT_MATCH_POLICY"
ENV_LOG_LEVEL = "CRASH_ASSISTANT_LOG_LEVEL"

# Name of the helper shipped inside Xcode's shared frameworks
SYMBOLICATION_TOOL_NAME = "symbolicatecrash"

# Variable symbolicatecrash reads to find the toolchain
DEVELOPER_DIR_VARIABLE = "DEVELOPER_DIR"

# Relative to the developer root ("/Applications/Xcode.app/Contents/Developer")
SHARED_FRAMEWORKS_RELATIVE_PATH = "../SharedFrameworks"


class MatchPolicy(str, Enum):
    """
    How a directory search picks one entry out of several matches.

    FIRST: first line of find output (filesystem order, not stable)
    NEWEST: most recently modified match
    """

    FIRST = "first"
    NEWEST = "newest"


class AssistantSettings(BaseModel):
    """Immutable runtime settings."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    xcode_select_path: str = "/usr/bin/xcode-select"
    find_path: str = "/usr/bin/find"
    developer_dir_override: Optional[str] = None
    match_policy: MatchPolicy = MatchPolicy.FIRST
    log_level: str = "INFO"


def load_settings(environ: Optional[Mapping[str, str]] = None) -> AssistantSettings:
    """
    Build settings from the environment.

    Unset or empty variables fall back to defaults. An unknown match policy
    raises pydantic.ValidationError; configuration is the only place this
    tool fails loudly.
    """
    env = os.environ if environ is None else environ

    values = {}
    if env.get(ENV_XCODE_SELECT):
        values["xcode_select_path"] = env[ENV_XCODE_SELECT]
    if env.get(ENV_FIND):
        values["find_path"] = env[ENV_FIND]
    if env.get(ENV_DEVELOPER_DIR):
        values["developer_dir_override"] = env[ENV_DEVELOPER_DIR]
    if env.get(ENV_MATCH_POLICY):
        values["match_policy"] = env[ENV_MATCH_POLICY].strip().lower()
    if env.get(ENV_LOG_LEVEL):
        values["log_level"] = env[ENV_LOG_LEVEL].strip().upper()

    return AssistantSettings(**values)
