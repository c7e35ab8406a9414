"""
Request/response bodies for the HTTP service.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from ..artifacts.models import RESOLVER_KINDS
from ..presentation import SlotDisplay
from ..session import SymbolicationSession


class ArtifactPaths(BaseModel):
    model_config = ConfigDict(extra="forbid")

    app: Optional[str] = None
    dsym: Optional[str] = None
    crash: Optional[str] = None


class SessionStateResponse(BaseModel):
    """Everything a drop-area UI renders."""

    model_config = ConfigDict(extra="forbid")

    display: SlotDisplay
    paths: ArtifactPaths
    can_clear: bool
    can_run: bool
    running: bool
    supported_extensions: List[str]
    suggested_output_name: Optional[str] = None

    @classmethod
    def from_session(cls, session: SymbolicationSession) -> "SessionStateResponse":
        state = session.state
        return cls(
            display=session.display(),
            paths=ArtifactPaths(**{kind.value: state.get(kind) for kind in RESOLVER_KINDS}),
            can_clear=session.can_clear(),
            can_run=session.can_invoke(),
            running=session.running,
            supported_extensions=sorted(session.supported_extensions),
            suggested_output_name=session.suggested_output_name(),
        )


class SubmitFilesRequest(BaseModel):
    """Files dropped on the UI."""

    model_config = ConfigDict(extra="forbid")

    paths: List[str]


class SubmitFilesResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")

    accepted: List[str]
    rejected: List[str]
    state: SessionStateResponse


class RunRequest(BaseModel):
    """
    Symbolication request.

    output_path: where to save the result; omitted = return text only
    """

    model_config = ConfigDict(extra="forbid")

    output_path: Optional[str] = None


class RunResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")

    output: str
    suggested_output_name: Optional[str] = None
    saved_path: Optional[str] = None
    saved: Optional[bool] = None
