"""Shared fixtures for errwire tests."""

from __future__ import annotations

import json
import logging

import pytest

from errwire.config import Settings
from errwire.registry import bundled_registry
from errwire.resolver import CodeResolver
from errwire.responder import ErrorResponder


@pytest.fixture
def registry():
    """The bundled taxonomy."""
    return bundled_registry()


@pytest.fixture
def resolver(registry):
    """A freshly built resolver over the bundled taxonomy."""
    return CodeResolver(registry)


@pytest.fixture
def dev_settings():
    return Settings(production=False, hostname="test-host")


@pytest.fixture
def prod_settings():
    return Settings(production=True, hostname="test-host")


@pytest.fixture
def test_logger():
    return logging.getLogger("errwire.tests")


@pytest.fixture
def dev_responder(dev_settings, test_logger):
    return ErrorResponder(settings=dev_settings, logger=test_logger)


@pytest.fixture
def prod_responder(prod_settings, test_logger):
    return ErrorResponder(settings=prod_settings, logger=test_logger)


@pytest.fixture
def registry_file(tmp_path):
    """Write a registry document to a temp file; returns a writer."""

    def _write(errors: dict, version: str = "2.0"):
        path = tmp_path / "errors.json"
        path.write_text(json.dumps({"version": version, "errors": errors}))
        return path

    return _write
