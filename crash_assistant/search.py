"""
Directory search backed by find(1).

Runs `find <dir> -type {f|d} -name <pattern> -print` and returns every
match in output order. Picking ONE match is a separate, replaceable
selection strategy:

- first_match: index 0 of find output. This is filesystem-order dependent
  and NOT a stable sort; it is the default for behavioral fidelity.
- newest_match: most recently modified candidate.
"""

import logging
import os
from enum import Enum
from typing import Callable, List, Optional

from .config import MatchPolicy
from .errors import SearchProducedNoMatchError
from .execution.process import run_command
from .paths import normalize_path

logger = logging.getLogger(__name__)


class EntryType(str, Enum):
    """find -type argument."""

    FILE = "f"
    DIRECTORY = "d"


SelectionStrategy = Callable[[List[str]], Optional[str]]


def first_match(matches: List[str]) -> Optional[str]:
    """First candidate as reported by find."""
    return matches[0] if matches else None


def newest_match(matches: List[str]) -> Optional[str]:
    """Most recently modified candidate; ties keep find order."""
    newest = None
    newest_mtime = None
    for match in matches:
        try:
            mtime = os.path.getmtime(match)
        except OSError:
            continue
        if newest_mtime is None or mtime > newest_mtime:
            newest, newest_mtime = match, mtime
    return newest


def strategy_for(policy: MatchPolicy) -> SelectionStrategy:
    if policy == MatchPolicy.NEWEST:
        return newest_match
    return first_match


class DirectorySearch:
    """
    find-backed search with a pluggable selection strategy.

    Args:
        find_path: Path to the find executable
        select: Strategy choosing one entry from the ordered matches
    """

    def __init__(self, find_path: str = "/usr/bin/find", select: SelectionStrategy = first_match):
        self.find_path = find_path
        self.select = select

    def matches(self, directory: str, entry_type: EntryType, pattern: str) -> List[str]:
        """
        All matches under `directory`, normalized, in find output order.

        A missing directory, a failed find or undecodable output all
        yield an empty list.
        """
        result = run_command(
            self.find_path,
            [directory, "-type", entry_type.value, "-name", pattern, "-print"],
        )
        if result.stdout is None:
            logger.warning(f"[Search] find produced no readable output for {directory}: {result.stderr}")
            return []
        return [normalize_path(line) for line in result.stdout.splitlines() if line.strip()]

    def find_one(self, directory: str, entry_type: EntryType, pattern: str) -> str:
        """
        One match under `directory`, chosen by the selection strategy.

        Raises:
            SearchProducedNoMatchError: If nothing matched
        """
        candidates = self.matches(directory, entry_type, pattern)
        if len(candidates) > 1:
            logger.debug(f"[Search] {len(candidates)} matches for {pattern} in {directory}")
        chosen = self.select(candidates)
        if chosen is None:
            raise SearchProducedNoMatchError(f"no {pattern} under {directory}")
        return chosen
