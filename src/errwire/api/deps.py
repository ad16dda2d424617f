"""Shared dependencies for the errwire API."""

from __future__ import annotations

from errwire.resolver import CodeResolver, default_resolver


def get_resolver() -> CodeResolver:
    """FastAPI dependency: the resolver over the bundled taxonomy."""
    return default_resolver()
