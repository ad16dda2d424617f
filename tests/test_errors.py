"""Tests for the variant factory and the stable-code resolver."""

from __future__ import annotations

import copy
import pickle

import pytest

from errwire.errors import HttpError, TaxonomyError, make_variant, variant_name
from errwire.exceptions import RegistryError
from errwire.resolver import build_error, default_resolver, variant


class TestTaxonomyError:
    def test_defaults(self):
        err = TaxonomyError()
        assert err.status_code == 500
        assert err.message == "Internal server error"
        assert err.error_code is None
        assert err.status is False
        assert str(err) == "Internal server error"

    def test_name_is_class_name(self):
        assert HttpError(418, "teapot").name == "HttpError"


class TestCopyAndPickle:
    def test_copy_keeps_constructor_arguments(self):
        clone = copy.copy(HttpError(418, "teapot", "TEAPOT"))
        assert type(clone) is HttpError
        assert (clone.status_code, clone.message, clone.error_code) == (418, "teapot", "TEAPOT")
        assert str(clone) == "teapot"

    def test_pickle_round_trip(self):
        clone = pickle.loads(pickle.dumps(HttpError(429, "Slow down", "RATE_LIMITED")))
        assert type(clone) is HttpError
        assert (clone.status_code, clone.message, clone.error_code) == (429, "Slow down", "RATE_LIMITED")

    def test_extra_attributes_survive(self):
        err = TaxonomyError(503, "Down for maintenance")
        err.retry_after = 30
        assert copy.copy(err).retry_after == 30

    def test_deepcopy_variant(self, registry):
        err = make_variant(registry["GONE"])("Item purged")
        clone = copy.deepcopy(err)
        assert isinstance(clone, TaxonomyError)
        assert clone.name == "GoneError"
        assert (clone.status_code, clone.message, clone.error_code) == (410, "Item purged", "GONE")

    def test_pickle_variant(self):
        clone = pickle.loads(pickle.dumps(variant("NOT_FOUND")()))
        assert (clone.status_code, clone.message, clone.error_code) == (404, "Not Found", "NOT_FOUND")


class TestMakeVariant:
    def test_every_definition_default_message(self, registry):
        for definition in registry.values():
            err = make_variant(definition)()
            assert err.status_code == definition.http_status
            assert err.error_code == definition.stable_code
            assert err.message == definition.default_message
            assert err.status is False

    def test_every_definition_override(self, registry):
        for definition in registry.values():
            err = make_variant(definition)("custom text")
            assert err.message == "custom text"
            assert err.status_code == definition.http_status
            assert err.error_code == definition.stable_code

    def test_empty_override_falls_back(self, registry):
        err = make_variant(registry["GONE"])("")
        assert err.message == "Resource gone"

    def test_variant_is_taxonomy_error(self, registry):
        cls = make_variant(registry["NOT_FOUND"])
        assert issubclass(cls, TaxonomyError)
        assert cls.__name__ == "NotFoundError"
        assert cls.definition is registry["NOT_FOUND"]
        with pytest.raises(TaxonomyError):
            raise cls()

    def test_repeated_calls_behave_alike(self, registry):
        a = make_variant(registry["CONFLICT"])
        b = make_variant(registry["CONFLICT"])
        assert a is not b
        assert a("x").error_code == b("x").error_code
        assert a("x").status_code == b("x").status_code

    def test_variant_name(self):
        assert variant_name("HTTP_VERSION_NOT_SUPPORTED") == "HttpVersionNotSupportedError"
        assert variant_name("UNKNOWN") == "UnknownError"


class TestCodeResolver:
    def test_resolves_every_code(self, registry, resolver):
        for definition in registry.values():
            cls = resolver.resolve(definition.stable_code)
            assert cls is not None
            assert cls().error_code == definition.stable_code

    def test_unknown_code_absent(self, resolver):
        assert resolver.resolve("NOT_A_CODE") is None
        assert resolver.resolve("") is None

    def test_codes(self, registry, resolver):
        assert sorted(resolver.codes()) == sorted(d.stable_code for d in registry.values())

    def test_variant_by_key(self, resolver):
        err = resolver.variant("TOKEN_EXPIRED")("Session is stale")
        assert err.status_code == 401
        assert err.message == "Session is stale"
        assert err.error_code == "TOKEN_EXPIRED"

    def test_variant_unknown_key(self, resolver):
        with pytest.raises(RegistryError):
            resolver.variant("NOPE")

    def test_build_error_known_code(self, resolver):
        err = resolver.build_error(400, "Email taken", "DUPLICATE_KEY")
        assert type(err) is resolver.resolve("DUPLICATE_KEY")
        assert err.status_code == 409
        assert err.message == "Email taken"

    def test_build_error_unknown_code(self, resolver):
        err = resolver.build_error(418, "teapot", "TEAPOT")
        assert type(err) is HttpError
        assert err.status_code == 418
        assert err.error_code == "TEAPOT"

    def test_build_error_without_code(self, resolver):
        err = resolver.build_error(503)
        assert type(err) is HttpError
        assert err.message == "Internal server error"
        assert err.error_code is None

    def test_custom_registry(self, registry_file):
        from errwire.registry import load_registry
        from errwire.resolver import CodeResolver

        reg = load_registry(registry_file({"TEAPOT": {"status": 418, "message": "I'm a teapot", "code": "E418"}}))
        err = CodeResolver(reg).build_error(500, "", "E418")
        assert err.status_code == 418
        assert err.message == "I'm a teapot"


class TestModuleHelpers:
    def test_default_resolver_cached(self):
        assert default_resolver() is default_resolver()

    def test_variant_helper(self):
        err = variant("RATE_LIMIT_EXCEEDED")()
        assert err.status_code == 429

    def test_build_error_helper(self):
        assert build_error(404, "No such user", "NOT_FOUND").error_code == "NOT_FOUND"
