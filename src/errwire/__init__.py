"""errwire — error taxonomy and response envelopes for HTTP services."""

from pathlib import Path

_VERSION_FILE = Path(__file__).resolve().parent.parent.parent / "VERSION"
__version__ = _VERSION_FILE.read_text().strip() if _VERSION_FILE.exists() else "0.1.0"

from errwire.classifier import ClassificationOutcome, classify
from errwire.errors import HttpError, TaxonomyError, make_variant
from errwire.exceptions import ErrwireError, RegistryError
from errwire.registry import ErrorDefinition, Registry, bundled_registry, load_registry
from errwire.resolver import CodeResolver, build_error, default_resolver, variant

__all__ = [
    "__version__",
    "ClassificationOutcome",
    "CodeResolver",
    "ErrorDefinition",
    "ErrwireError",
    "HttpError",
    "Registry",
    "RegistryError",
    "TaxonomyError",
    "build_error",
    "bundled_registry",
    "classify",
    "default_resolver",
    "load_registry",
    "make_variant",
    "variant",
]
