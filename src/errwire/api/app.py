"""errwire demo service — FastAPI application wired to the error responder.

Every error raised by a route, including Starlette's own 404/405, leaves
through ErrorResponder and reaches the client as the error envelope.
"""

from __future__ import annotations

from typing import Optional

from fastapi import FastAPI

from errwire import __version__ as _VERSION
from errwire.api.routers import errors
from errwire.config import Settings
from errwire.envelope import success_response
from errwire.logging_setup import configure_logging
from errwire.responder import ErrorResponder


def create_app(
    settings: Optional[Settings] = None,
    responder: Optional[ErrorResponder] = None,
) -> FastAPI:
    """Build the application. No business logic belongs here."""
    settings = settings or Settings.from_env()
    configure_logging(level=settings.log_level)

    app = FastAPI(
        title="errwire",
        description="Error taxonomy and response envelope service.",
        version=_VERSION,
        docs_url=None if settings.production else "/docs",
        redoc_url=None,
    )

    # --- Exception handlers ---
    responder = responder or ErrorResponder(settings=settings)
    responder.install(app)
    app.state.responder = responder

    # --- Routers ---
    app.include_router(errors.router)

    # --- Health ---
    @app.get("/health")
    async def health():
        return success_response(
            200,
            {"version": _VERSION},
            "ok",
            include_timestamp=settings.include_timestamp,
        )

    return app


app = create_app()
