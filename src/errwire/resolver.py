"""Stable-code resolver — stable error code back to its concrete variant."""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from errwire.errors import DEFAULT_MESSAGE, HttpError, TaxonomyError, make_variant
from errwire.exceptions import RegistryError
from errwire.registry import Registry, bundled_registry


class CodeResolver:
    """Explicit code -> variant index, built once from a registry.

    Read-only after construction; safe to share across requests.
    """

    def __init__(self, registry: Registry):
        self.registry = registry
        self._by_key: dict[str, type[TaxonomyError]] = {}
        self._by_code: dict[str, type[TaxonomyError]] = {}
        for key, definition in registry.items():
            cls = make_variant(definition)
            self._by_key[key] = cls
            self._by_code[definition.stable_code] = cls

    def resolve(self, error_code: str) -> Optional[type[TaxonomyError]]:
        return self._by_code.get(error_code)

    def variant(self, key: str) -> type[TaxonomyError]:
        try:
            return self._by_key[key]
        except KeyError:
            raise RegistryError(f"Unknown error key: {key!r}") from None

    def codes(self) -> list[str]:
        return list(self._by_code)

    def build_error(
        self,
        status_code: int,
        message: str = DEFAULT_MESSAGE,
        error_code: Optional[str] = None,
    ) -> TaxonomyError:
        """Return a precisely-typed error for a known code, else a generic HttpError.

        When the code resolves, the variant's own status wins over
        ``status_code``. Callers raise the result.
        """
        if error_code:
            cls = self.resolve(error_code)
            if cls is not None:
                return cls(message)
        return HttpError(status_code, message, error_code)


@lru_cache(maxsize=1)
def default_resolver() -> CodeResolver:
    """Resolver over the bundled taxonomy."""
    return CodeResolver(bundled_registry())


def variant(key: str) -> type[TaxonomyError]:
    """Variant class for a bundled key, e.g. ``variant("NOT_FOUND")("No such user")``."""
    return default_resolver().variant(key)


def build_error(
    status_code: int,
    message: str = DEFAULT_MESSAGE,
    error_code: Optional[str] = None,
) -> TaxonomyError:
    return default_resolver().build_error(status_code, message, error_code)
