"""Wire envelopes for success and error responses.

Success: {"statusCode", "status", "message", "data"?, "timestamp"?}
Failure: {"status": false, "statusCode", "message", "errorCode"?, "name"?,
          "stack"?, "timestamp"?}

``status`` is true iff statusCode < 400. Optional fields are omitted, never null.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Generic, Optional, TypeVar

from fastapi.responses import JSONResponse
from pydantic import BaseModel, model_validator

T = TypeVar("T")


def _drop_none(body: dict) -> dict:
    # Top level only; None inside a data payload is preserved.
    return {k: v for k, v in body.items() if v is not None}


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ErrorEnvelope(BaseModel):
    status: bool = False
    statusCode: int
    message: str
    errorCode: Optional[str] = None
    name: Optional[str] = None
    stack: Optional[str] = None
    timestamp: Optional[str] = None

    def to_dict(self) -> dict:
        return _drop_none(self.model_dump())


class SuccessEnvelope(BaseModel, Generic[T]):
    statusCode: int = 200
    status: bool = True
    message: str = "Success"
    data: Optional[T] = None
    timestamp: Optional[str] = None

    @model_validator(mode="after")
    def _derive_status(self):
        self.status = self.statusCode < 400
        return self

    def to_dict(self) -> dict:
        return _drop_none(self.model_dump(mode="json"))


def success_response(
    status_code: int = 200,
    data: Any = None,
    message: str = "Success",
    include_timestamp: bool = False,
) -> JSONResponse:
    """Wrap a payload in the success envelope."""
    envelope = SuccessEnvelope(
        statusCode=status_code,
        message=message,
        data=data,
        timestamp=utc_timestamp() if include_timestamp else None,
    )
    return JSONResponse(status_code=status_code, content=envelope.to_dict())
