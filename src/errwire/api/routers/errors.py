"""Taxonomy browsing endpoints.

GET /errors — every error definition in the registry
GET /errors/{code} — one definition by stable code
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from errwire.api.deps import get_resolver
from errwire.registry import ErrorDefinition
from errwire.resolver import CodeResolver

router = APIRouter(prefix="/errors", tags=["errors"])


def _definition_body(definition: ErrorDefinition) -> dict:
    return {
        "key": definition.key,
        "status": definition.http_status,
        "message": definition.default_message,
        "code": definition.stable_code,
        "group": definition.group,
    }


@router.get("")
async def list_errors(resolver: CodeResolver = Depends(get_resolver)):
    """Return the complete error taxonomy."""
    registry = resolver.registry
    return {
        "version": registry.version,
        "count": len(registry),
        "errors": [_definition_body(d) for d in registry.values()],
    }


@router.get("/{code}")
async def get_error(code: str, resolver: CodeResolver = Depends(get_resolver)):
    """Return one definition; unknown codes answer with the NOT_FOUND envelope."""
    definition = resolver.registry.by_code(code)
    if definition is None:
        raise resolver.build_error(404, f"Unknown error code: {code!r}", "NOT_FOUND")
    return _definition_body(definition)
