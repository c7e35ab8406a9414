"""
Session endpoints: the HTTP version of the drop area.

All handlers are `async def` so every session mutation happens on the
event loop thread. symbolicatecrash runs on the invoker's worker and its
completion is handed back to the loop through EventLoopDispatcher.
"""

import asyncio
import logging
import os
from typing import Optional

from fastapi import APIRouter, HTTPException, Request

from ...execution.dispatch import EventLoopDispatcher
from ...session import SymbolicationSession
from ..schemas import (
    RunRequest,
    RunResponse,
    SessionStateResponse,
    SubmitFilesRequest,
    SubmitFilesResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/session", tags=["session"])


def _session(request: Request) -> SymbolicationSession:
    return request.app.state.session


@router.get("", response_model=SessionStateResponse)
async def get_session(request: Request) -> SessionStateResponse:
    return SessionStateResponse.from_session(_session(request))


@router.post("/files", response_model=SubmitFilesResponse)
async def submit_files(body: SubmitFilesRequest, request: Request) -> SubmitFilesResponse:
    """
    Offer dropped files to the session.

    Unsupported extensions (or any file before symbolicatecrash is
    located) are reported as rejected; nothing fails.
    """
    session = _session(request)
    accepted, rejected = [], []
    for path in body.paths:
        if session.submit_file(path):
            accepted.append(path)
        else:
            rejected.append(path)
    if rejected:
        logger.info(f"[API] Rejected {len(rejected)} file(s)")
    return SubmitFilesResponse(
        accepted=accepted,
        rejected=rejected,
        state=SessionStateResponse.from_session(session),
    )


@router.post("/clear", response_model=SessionStateResponse)
async def clear_session(request: Request) -> SessionStateResponse:
    session = _session(request)
    if session.running:
        raise HTTPException(status_code=409, detail="Symbolication running")
    if not session.can_clear():
        raise HTTPException(status_code=409, detail="Nothing to clear")
    session.clear()
    return SessionStateResponse.from_session(session)


@router.post("/run", response_model=RunResponse)
async def run_symbolication(request: Request, body: Optional[RunRequest] = None) -> RunResponse:
    """
    Run symbolicatecrash and wait for its output.

    409: symbolicatecrash or crash log missing, or a run is in progress
    502: symbolicatecrash produced no output
    """
    session = _session(request)
    body = body or RunRequest()

    if session.running:
        raise HTTPException(status_code=409, detail="Symbolication already running")
    if not session.can_invoke():
        raise HTTPException(
            status_code=409,
            detail="Cannot run: symbolicatecrash and a crash log are required",
        )

    suggested_name = session.suggested_output_name()
    loop = asyncio.get_running_loop()
    finished = loop.create_future()
    started = session.invoke(finished.set_result, EventLoopDispatcher(loop))
    if not started:
        raise HTTPException(status_code=409, detail="Symbolication already running")

    output = await finished
    if output is None:
        logger.warning("[API] symbolicatecrash produced no output")
        raise HTTPException(status_code=502, detail="symbolicatecrash produced no output")

    response = RunResponse(output=output, suggested_output_name=suggested_name)
    if body.output_path:
        destination = body.output_path
        if os.path.isdir(destination) and response.suggested_output_name:
            destination = os.path.join(destination, response.suggested_output_name)
        response.saved_path = destination
        response.saved = session.save_output(output, destination)
    return response
