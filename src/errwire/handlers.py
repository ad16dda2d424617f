"""Async-boundary adapter for request handlers.

``wrap`` makes sure a handler's failure reaches the error dispatch path,
whether it raised synchronously or its awaitable failed.
"""

from __future__ import annotations

import functools
import inspect
from typing import Any, Callable, Optional

from fastapi import Request
from fastapi.responses import JSONResponse

from errwire.responder import ErrorResponder

Forward = Callable[[BaseException], Any]


def wrap(handler: Callable[..., Any]) -> Callable[..., Any]:
    """Adapt ``handler`` so failures go to ``forward`` exactly once.

    The adapted handler is awaited as ``await adapted(*args, forward=fn)``.
    On success it returns the handler's result and never calls ``forward``.
    On failure it returns whatever ``forward`` returns (awaited if needed).
    The error is passed through untouched.

    Without ``forward`` the error is re-raised, so ``wrap`` can decorate a
    FastAPI route directly and leave the failure to the installed
    ErrorResponder. The route keeps the handler's signature.
    """

    @functools.wraps(handler)
    async def adapted(*args: Any, forward: Optional[Forward] = None, **kwargs: Any) -> Any:
        try:
            result = handler(*args, **kwargs)
            if inspect.isawaitable(result):
                result = await result
        except Exception as exc:
            if forward is None:
                raise
            forwarded = forward(exc)
            if inspect.isawaitable(forwarded):
                forwarded = await forwarded
            return forwarded
        return result

    return adapted


def forward_to(responder: ErrorResponder, request: Request) -> Callable[[BaseException], Any]:
    """A ``forward`` callable that hands errors to ``responder`` for ``request``."""

    async def forward(exc: BaseException) -> JSONResponse:
        return await responder.handle(request, exc)

    return forward
