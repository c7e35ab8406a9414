"""
Readiness API endpoint.

Provides the structured readiness report for frontend consumption.
"""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from ...readiness import generate_readiness_report

router = APIRouter()


@router.get("/api/readiness")
async def get_readiness(request: Request):
    """
    Get the toolchain readiness report.

    Example Response:
        {
            "version": "1.0.0",
            "ready": true,
            "summary": {"total_checks": 4, "passed": 4, "failed": 0, "blocking_failures": 0},
            "checks": [
                {"id": "developer_root_located", "status": "pass", "message": "..."},
                ...
            ]
        }
    """
    session = request.app.state.session
    report = generate_readiness_report(session.tool_locator, request.app.state.settings)
    return JSONResponse(content=report.to_dict())
