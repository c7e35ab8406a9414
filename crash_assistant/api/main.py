"""
Crash Assistant HTTP service - drop area + readiness.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from .. import __version__
from ..config import AssistantSettings, load_settings
from ..session import SymbolicationSession
from .routes import readiness, session


def create_app(
    settings: Optional[AssistantSettings] = None,
    symbolication_session: Optional[SymbolicationSession] = None,
) -> FastAPI:
    """
    Build the service.

    Toolchain discovery runs here, once, unless a ready-made session is
    passed in.
    """
    settings = settings or load_settings()
    symbolication_session = symbolication_session or SymbolicationSession.create(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        symbolication_session.close()

    app = FastAPI(title="Crash Assistant", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.session = symbolication_session

    app.include_router(session.router)
    app.include_router(readiness.router)

    @app.get("/")
    async def root():
        return {"service": "crash-assistant", "status": "running"}

    return app
