"""Error definition registry — load, validate, and query the error taxonomy."""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from functools import lru_cache
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from errwire.exceptions import RegistryError

GROUPS = (
    "client",
    "server",
    "auth",
    "validation",
    "database",
    "file",
    "external",
    "rate_limit",
    "application",
    "unknown",
)


class ErrorDefinition(BaseModel):
    """One named error kind: HTTP status, default message, stable code."""

    model_config = ConfigDict(frozen=True)

    key: str
    http_status: int = Field(ge=100, le=599)
    default_message: str
    stable_code: str = Field(min_length=1)
    group: str = "unknown"


class Registry(Mapping[str, ErrorDefinition]):
    """Read-only mapping of key -> ErrorDefinition.

    Construction validates the whole set: keys and stable codes must be
    unique, statuses must be valid HTTP statuses.
    """

    def __init__(self, definitions: list[ErrorDefinition], version: str = "1.0"):
        by_key: dict[str, ErrorDefinition] = {}
        seen_codes: dict[str, str] = {}
        for definition in definitions:
            if definition.key in by_key:
                raise RegistryError(f"Duplicate error key: {definition.key!r}")
            owner = seen_codes.get(definition.stable_code)
            if owner is not None:
                raise RegistryError(
                    f"Stable code {definition.stable_code!r} used by both "
                    f"{owner!r} and {definition.key!r}"
                )
            by_key[definition.key] = definition
            seen_codes[definition.stable_code] = definition.key
        self._definitions = MappingProxyType(by_key)
        self.version = version

    def __getitem__(self, key: str) -> ErrorDefinition:
        return self._definitions[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def require(self, key: str) -> ErrorDefinition:
        """Return the definition for key, raising RegistryError if unknown."""
        try:
            return self._definitions[key]
        except KeyError:
            raise RegistryError(f"Unknown error key: {key!r}") from None

    def by_group(self, group: str) -> list[ErrorDefinition]:
        return [d for d in self._definitions.values() if d.group == group]

    def by_code(self, stable_code: str) -> Optional[ErrorDefinition]:
        for definition in self._definitions.values():
            if definition.stable_code == stable_code:
                return definition
        return None


def parse_registry(raw: dict) -> Registry:
    """Build a Registry from the JSON document shape.

    {"version": "1.0", "errors": {KEY: {"status", "message", "code", "group"}}}
    """
    if not isinstance(raw, dict) or not isinstance(raw.get("errors"), dict):
        raise RegistryError("Registry document must contain an 'errors' object")

    definitions = []
    for key, entry in raw["errors"].items():
        if not isinstance(entry, dict):
            raise RegistryError(f"Entry {key!r} must be an object")
        try:
            definitions.append(
                ErrorDefinition(
                    key=key,
                    http_status=entry["status"],
                    default_message=entry["message"],
                    stable_code=entry.get("code", key),
                    group=entry.get("group", "unknown"),
                )
            )
        except KeyError as e:
            raise RegistryError(f"Entry {key!r} is missing field {e.args[0]!r}") from e
        except ValidationError as e:
            raise RegistryError(f"Entry {key!r} is invalid: {e}") from e
    return Registry(definitions, version=str(raw.get("version", "1.0")))


@lru_cache(maxsize=1)
def bundled_registry() -> Registry:
    """Load the taxonomy bundled as package data (never changes at runtime)."""
    try:
        ref = resources.files("errwire.data").joinpath("errors_v1.json")
        raw = json.loads(ref.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise RegistryError(f"Failed to load bundled registry: {e}") from e
    return parse_registry(raw)


def load_registry(path: Optional[Path] = None) -> Registry:
    """Load a registry file, or the bundled taxonomy when no path is given."""
    if path is None:
        return bundled_registry()
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        raise RegistryError(f"Cannot read registry file {str(path)!r}: {e}") from e
    except ValueError as e:
        raise RegistryError(f"Registry file {str(path)!r} is not valid JSON: {e}") from e
    return parse_registry(raw)
