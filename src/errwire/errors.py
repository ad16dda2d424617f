"""Taxonomy error values and the per-definition variant factory."""

from __future__ import annotations

from typing import Optional

from errwire.registry import ErrorDefinition

DEFAULT_MESSAGE = "Internal server error"


class TaxonomyError(Exception):
    """An error carrying its own HTTP status and optional stable error code.

    Anything raised as a TaxonomyError is authoritative: the responder uses
    its status, message, and code verbatim.
    """

    status = False

    def __init__(
        self,
        status_code: int = 500,
        message: str = DEFAULT_MESSAGE,
        error_code: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.error_code = error_code

    def __reduce__(self):
        # copy and pickle rebuild from the full constructor arguments
        return type(self), (self.status_code, self.message, self.error_code), self.__dict__

    @property
    def name(self) -> str:
        return type(self).__name__

    def __repr__(self) -> str:
        return (
            f"{self.name}(status_code={self.status_code!r}, "
            f"message={self.message!r}, error_code={self.error_code!r})"
        )


class HttpError(TaxonomyError):
    """Generic variant for a status/message pair with no known definition."""


def variant_name(key: str) -> str:
    """NOT_FOUND -> NotFoundError. Display only; never used for lookup."""
    return "".join(part.capitalize() for part in key.split("_") if part) + "Error"


def _rebuild_variant(definition: ErrorDefinition, message: str) -> TaxonomyError:
    return make_variant(definition)(message)


def make_variant(definition: ErrorDefinition) -> type[TaxonomyError]:
    """Build a TaxonomyError subclass bound to one registry definition.

    Instances take an optional message override; status and code are fixed.
    Each call returns a fresh class, so compare errors by ``error_code``.
    """

    def __init__(self, message: Optional[str] = None):
        TaxonomyError.__init__(
            self,
            definition.http_status,
            message or definition.default_message,
            definition.stable_code,
        )

    def __reduce__(self):
        # Variant classes are built at runtime and cannot be looked up by name
        return _rebuild_variant, (self.definition, self.message), self.__dict__

    name = variant_name(definition.key)
    return type(
        name,
        (TaxonomyError,),
        {
            "__init__": __init__,
            "__reduce__": __reduce__,
            "__doc__": f"{definition.default_message} ({definition.http_status}).",
            "__module__": __name__,
            "__qualname__": name,
            "definition": definition,
        },
    )
