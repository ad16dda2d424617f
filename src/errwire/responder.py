"""Terminal error responder: classify, log one line, write the envelope."""

from __future__ import annotations

import logging
import traceback
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from errwire.classifier import RULES, ClassificationOutcome, Rule, classify, kind_name
from errwire.config import Settings
from errwire.envelope import ErrorEnvelope, utc_timestamp
from errwire.errors import TaxonomyError


def format_stack(value: Any) -> Optional[str]:
    """Formatted traceback of an exception, or None if it carries none."""
    if not isinstance(value, BaseException) or value.__traceback__ is None:
        return None
    try:
        return "".join(traceback.format_exception(type(value), value, value.__traceback__))
    except Exception:
        # Trace capture is best-effort
        return None


class ErrorResponder:
    """Maps any error raised while serving a request to the error envelope.

    The logger is injected; nothing here configures logging. The responder
    holds only read-only state and can serve concurrent requests.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        logger: Optional[logging.Logger] = None,
        rules: tuple[Rule, ...] = RULES,
    ):
        self.settings = settings or Settings.from_env()
        self.logger = logger or logging.getLogger("errwire")
        self.rules = rules

    def respond(
        self, error: Any, method: str, path: str
    ) -> tuple[ClassificationOutcome, dict]:
        """Classify ``error`` and return (outcome, envelope body)."""
        outcome = classify(error, self.rules)
        diagnostics = self.settings.diagnostics
        name = kind_name(error)
        stack = format_stack(error) if diagnostics else None

        self._log(outcome, method, path, name, stack)

        envelope = ErrorEnvelope(
            statusCode=outcome.status_code,
            message=outcome.message,
            errorCode=outcome.error_code,
            name=name if diagnostics else None,
            stack=stack,
            timestamp=utc_timestamp() if self.settings.include_timestamp else None,
        )
        return outcome, envelope.to_dict()

    def _log(
        self,
        outcome: ClassificationOutcome,
        method: str,
        path: str,
        name: str,
        stack: Optional[str],
    ) -> None:
        line = (
            f"[{self.settings.hostname}] [{outcome.status_code}] | "
            f"{method} {path} - {name} | {outcome.message}"
        )
        if stack:
            line = f"{line} | {stack}"
        level = logging.ERROR if outcome.status_code >= 500 else logging.WARNING
        self.logger.log(level, line)

    async def handle(self, request: Request, exc: Exception) -> JSONResponse:
        """Starlette exception handler signature."""
        path = request.url.path
        if request.url.query:
            path = f"{path}?{request.url.query}"
        outcome, body = self.respond(exc, request.method, path)
        return JSONResponse(status_code=outcome.status_code, content=body)

    def install(self, app: FastAPI) -> None:
        """Register as the terminal handler for every error on ``app``.

        Handlers for TaxonomyError, HTTPException and request validation
        failures answer inside the exception middleware, replacing FastAPI's
        default 422 body; the Exception handler runs in Starlette's
        server-error middleware, which re-raises after responding.
        """
        app.add_exception_handler(TaxonomyError, self.handle)
        app.add_exception_handler(StarletteHTTPException, self.handle)
        app.add_exception_handler(RequestValidationError, self.handle)
        app.add_exception_handler(Exception, self.handle)
