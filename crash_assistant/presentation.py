"""
Slot display text.

Pure functions from "what is known" to the text a front end shows for
each slot. No filesystem access, no resolver mutation.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from .artifacts.models import ResolverState

INSTALL_XCODE = "Install Xcode."
DETECT_WITH_CRASH_FILE = "Detect automatically with using the crash file."
DROP_APP = "Ready to drop xcarchive file or app file."
DROP_DSYM = "Ready to drop xcarchive file or dsym file."
DROP_CRASH = "Ready to drop xccrashpoint file or crash file."


class SlotDisplay(BaseModel):
    """Display text for the four visible slots."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    symbolicatecrash: str
    app: str
    dsym: str
    crash: str


def _optional_slot(path: Optional[str], crash_known: bool, drop_prompt: str) -> str:
    if path is not None:
        return path
    if crash_known:
        return DETECT_WITH_CRASH_FILE
    return drop_prompt


def describe_slots(tool_path: Optional[str], state: ResolverState) -> SlotDisplay:
    """
    Choose the text for each slot.

    A known path is shown verbatim. Otherwise app and dSYM say they will be
    detected from the crash file once one is known (symbolicatecrash finds
    them through Spotlight), else they prompt for a drop.
    """
    crash_known = state.crash_path is not None
    return SlotDisplay(
        symbolicatecrash=tool_path if tool_path is not None else INSTALL_XCODE,
        app=_optional_slot(state.app_path, crash_known, DROP_APP),
        dsym=_optional_slot(state.dsym_path, crash_known, DROP_DSYM),
        crash=state.crash_path if crash_known else DROP_CRASH,
    )
