"""Classify an arbitrary error value into a status / message / code outcome.

Rules are evaluated strictly in order and the first match wins:

1. taxonomy       — our own TaxonomyError, used verbatim
2. duplicate_key  — storage driver duplicate-key signal (code 11000)
3. validation     — storage/model ``ValidationError`` kind
4. cast           — storage ``CastError`` kind
5. token          — token verification failures (expired / malformed / not active)
6. os_error       — recognized OS error codes
7. runtime        — built-in language runtime error kinds
8. outbound       — outbound HTTP client / network failures
9. fallback       — whatever status and message the value carries, else 500

Nothing here performs I/O; classify() is a pure function of its input.
"""

from __future__ import annotations

import errno
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Optional

import httpx

from errwire.errors import TaxonomyError

GENERIC_MESSAGE = "Something went wrong. Please try again later."

DUPLICATE_KEY_CODE = 11000

TOKEN_MESSAGES = {
    # expired
    "ExpiredSignatureError": "Access token has expired",
    "TokenExpiredError": "Access token has expired",
    # malformed
    "InvalidTokenError": "Invalid access token",
    "DecodeError": "Invalid access token",
    "InvalidSignatureError": "Invalid access token",
    "JsonWebTokenError": "Invalid access token",
    # not yet active
    "ImmatureSignatureError": "Access token not active yet",
    "NotBeforeError": "Access token not active yet",
}

VALIDATION_KINDS = frozenset({"ValidationError", "RequestValidationError"})

OS_ERRORS = {
    "ENOENT": (404, "File or resource not found."),
    "EACCES": (403, "Permission denied."),
    "ECONNREFUSED": (503, "Connection refused."),
    "ETIMEDOUT": (504, "Request timed out."),
    "ECONNRESET": (502, "Connection was reset."),
}

RUNTIME_KINDS = (
    SyntaxError,
    NameError,
    TypeError,
    AttributeError,
    IndexError,
    UnicodeError,
    ExceptionGroup,
)
_RUNTIME_NAMES = frozenset(k.__name__ for k in RUNTIME_KINDS)

_NETWORK_RE = re.compile(r"fetch|network", re.IGNORECASE)


@dataclass(frozen=True)
class ClassificationOutcome:
    status_code: int
    message: str
    error_code: Optional[str] = None
    rule: str = "fallback"


Resolution = tuple[int, str, Optional[str]]


@dataclass(frozen=True)
class Rule:
    name: str
    matches: Callable[[Any], bool]
    resolve: Callable[[Any], Resolution]


# --- Shape helpers ---


def _attr(value: Any, *names: str) -> Any:
    """First present attribute (or mapping key) among names, else None.

    A property that raises counts as absent.
    """
    for name in names:
        if isinstance(value, Mapping):
            if name in value:
                return value[name]
        else:
            try:
                found = getattr(value, name, None)
            except Exception:
                continue
            if found is not None:
                return found
    return None


def kind_name(value: Any) -> str:
    """Kind name of an error value.

    Exceptions are named by their class. Foreign error payloads (mappings,
    driver objects) may carry their kind in a ``name`` field.
    """
    if isinstance(value, BaseException):
        return type(value).__name__
    name = _attr(value, "name")
    if isinstance(name, str) and name:
        return name
    if isinstance(value, Mapping):
        return "Error"
    return type(value).__name__


def message_of(value: Any) -> str:
    for candidate in (_attr(value, "message"), _attr(value, "detail")):
        if isinstance(candidate, str) and candidate:
            return candidate
    if isinstance(value, BaseException):
        return str(value)
    return ""


def _is_http_status(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 100 <= value <= 599


# --- Rules ---


def _is_taxonomy(value: Any) -> bool:
    return isinstance(value, TaxonomyError)


def _resolve_taxonomy(value: TaxonomyError) -> Resolution:
    return value.status_code, value.message, value.error_code


def _duplicate_key_details(value: Any) -> Optional[Mapping]:
    details = _attr(value, "details")
    return details if isinstance(details, Mapping) else None


def _is_duplicate_key(value: Any) -> bool:
    if _attr(value, "code") == DUPLICATE_KEY_CODE:
        return True
    details = _duplicate_key_details(value)
    return details is not None and details.get("code") == DUPLICATE_KEY_CODE


def _resolve_duplicate_key(value: Any) -> Resolution:
    key_value = _attr(value, "key_value", "keyValue")
    if key_value is None:
        details = _duplicate_key_details(value)
        if details is not None:
            key_value = details.get("keyValue")
    fields = []
    if isinstance(key_value, Mapping):
        fields = [f"{k}: {v}" for k, v in key_value.items()]
    # No pairs available degrades to "Duplicate entry:  already exists."
    return 409, f"Duplicate entry: {', '.join(fields)} already exists.", None


def _is_validation(value: Any) -> bool:
    return kind_name(value) in VALIDATION_KINDS


def _item_message(item: Any) -> str:
    if isinstance(item, str):
        return item
    if isinstance(item, Mapping):
        return str(item.get("message") or item.get("msg") or "")
    return message_of(item)


def _field_messages(value: Any) -> list[str]:
    errors = _attr(value, "errors")
    if callable(errors):
        # pydantic / FastAPI: errors() -> [{"loc": ..., "msg": ...}, ...]
        errors = errors()
    if isinstance(errors, Mapping):
        errors = list(errors.values())
    if not isinstance(errors, (list, tuple)):
        return []
    return [_item_message(item) for item in errors]


def _resolve_validation(value: Any) -> Resolution:
    return 400, ", ".join(_field_messages(value)), None


def _is_cast(value: Any) -> bool:
    return kind_name(value) == "CastError"


def _resolve_cast(value: Any) -> Resolution:
    return 400, f"Invalid {_attr(value, 'path')}: {_attr(value, 'value')}", None


def _token_message(value: Any) -> Optional[str]:
    """Message for the nearest token-error kind in the value's class hierarchy.

    PyJWT raises subclasses such as InvalidAudienceError; walking the MRO
    lets them land on their InvalidTokenError base. Subclass names come
    first, so expired and not-yet-active win over the generic base.
    """
    if isinstance(value, BaseException):
        names = [cls.__name__ for cls in type(value).__mro__]
    else:
        names = [kind_name(value)]
    for name in names:
        if name in TOKEN_MESSAGES:
            return TOKEN_MESSAGES[name]
    return None


def _is_token(value: Any) -> bool:
    return _token_message(value) is not None


def _resolve_token(value: Any) -> Resolution:
    return 401, _token_message(value), None


def os_code(value: Any) -> Optional[str]:
    """Symbolic OS error code (``"ENOENT"``), from ``code`` or ``errno``."""
    code = _attr(value, "code")
    if isinstance(code, str) and code:
        return code
    number = _attr(value, "errno")
    if isinstance(number, int):
        return errno.errorcode.get(number)
    return None


def _is_os_error(value: Any) -> bool:
    return os_code(value) in OS_ERRORS


def _resolve_os_error(value: Any) -> Resolution:
    code = os_code(value)
    status, text = OS_ERRORS[code]
    return status, f"{text} ({code})", None


def _is_runtime(value: Any) -> bool:
    return isinstance(value, RUNTIME_KINDS) or kind_name(value) in _RUNTIME_NAMES


def _resolve_runtime(value: Any) -> Resolution:
    return 500, f"Unexpected {kind_name(value)}: {message_of(value)}", None


def _is_outbound(value: Any) -> bool:
    if isinstance(value, httpx.HTTPError) or _attr(value, "is_outbound_error"):
        return True
    return bool(_NETWORK_RE.search(message_of(value)))


def _resolve_outbound(value: Any) -> Resolution:
    return 502, f"External API/network request failed: {message_of(value)}", None


def _resolve_fallback(value: Any) -> Resolution:
    status = _attr(value, "status_code", "statusCode")
    if not _is_http_status(status):
        status = 500
    code = _attr(value, "error_code", "errorCode")
    return status, message_of(value) or GENERIC_MESSAGE, code if isinstance(code, str) else None


RULES: tuple[Rule, ...] = (
    Rule("taxonomy", _is_taxonomy, _resolve_taxonomy),
    Rule("duplicate_key", _is_duplicate_key, _resolve_duplicate_key),
    Rule("validation", _is_validation, _resolve_validation),
    Rule("cast", _is_cast, _resolve_cast),
    Rule("token", _is_token, _resolve_token),
    Rule("os_error", _is_os_error, _resolve_os_error),
    Rule("runtime", _is_runtime, _resolve_runtime),
    Rule("outbound", _is_outbound, _resolve_outbound),
    Rule("fallback", lambda value: True, _resolve_fallback),
)


def _fallback_outcome(value: Any) -> ClassificationOutcome:
    try:
        status, message, code = _resolve_fallback(value)
    except Exception:
        status, message, code = 500, GENERIC_MESSAGE, None
    return ClassificationOutcome(status, message, code, "fallback")


def classify(value: Any, rules: tuple[Rule, ...] = RULES) -> ClassificationOutcome:
    """Resolve an error value to the outcome of the first matching rule.

    A rule that raises while inspecting a malformed value ends the scan;
    the value is then answered by the fallback. classify() never raises.
    """
    for rule in rules:
        try:
            if not rule.matches(value):
                continue
            status, message, code = rule.resolve(value)
        except Exception:
            break
        return ClassificationOutcome(status, message, code or None, rule.name)
    return _fallback_outcome(value)
