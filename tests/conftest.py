"""
Pytest configuration and shared fixtures for ocpversion tests.

This module provides reusable fixtures and test utilities used across
the test suite.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import yaml

from ocpversion.logging import SilentLogger, set_global_logger
from ocpversion.models import HostFacts, RawInputs, ResolutionContext
from ocpversion.query import StaticImageQuery, StaticPackageQuery


@pytest.fixture(autouse=True)
def silent_global_logger():
    """
    Reset the global logger after every test.

    CLI handlers install a printing logger; later tests expect silence.
    """
    yield
    set_global_logger(SilentLogger())


@pytest.fixture
def tmp_test_dir(tmp_path: Path) -> Path:
    """
    Provide a temporary directory for test artifacts.

    Automatically cleaned up after test completion.
    """
    return tmp_path


@pytest.fixture
def sample_profile_data() -> dict[str, Any]:
    """
    Provide a complete host profile for a native Origin master.

    Uses static backends so no command is ever run.
    """
    return {
        "apiVersion": "ocpversion/v1",
        "host": {
            "name": "master1.example.com",
            "groups": ["oo_masters_to_config"],
        },
        "facts": {
            "is_containerized": False,
            "is_atomic": False,
            "deployment_type": "origin",
            "service_type": "origin",
        },
        "vars": {
            "openshift_release": "v3.6",
        },
        "repository": {
            "backend": "static",
            "packages": {"origin": ["3.6.0", "3.6.1"]},
        },
        "images": {
            "backend": "static",
            "tags": {},
        },
    }


@pytest.fixture
def sample_inventory_defaults() -> dict[str, Any]:
    """Provide sample inventory-wide defaults."""
    return {
        "apiVersion": "ocpversion/v1",
        "facts": {
            "deployment_type": "origin",
            "service_type": "origin",
        },
        "vars": {
            "openshift_release": "3.6",
            "openshift_protect_installed_version": True,
        },
        "repository": {
            "backend": "static",
            "packages": {"origin": ["3.6.1"]},
        },
    }


@pytest.fixture
def create_yaml_file(tmp_test_dir: Path):
    """
    Factory fixture for creating temporary YAML files.

    Usage:
        yaml_path = create_yaml_file("test.yaml", {"key": "value"})
    """

    def _create(filename: str, data: dict[str, Any]) -> Path:
        path = tmp_test_dir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.dump(data, f)
        return path

    return _create


@pytest.fixture
def make_context():
    """
    Factory fixture for building resolution contexts.

    Usage:
        ctx = make_context(
            inputs=RawInputs(release="3.6"),
            packages={"origin": ["3.6.1"]},
            is_containerized=True,
        )

    Keyword arguments not listed below are passed to HostFacts. The host
    is a master unless groups are given.
    """

    def _make(
        inputs: RawInputs | None = None,
        packages: dict[str, list[str]] | None = None,
        tags: dict[str, str] | None = None,
        **facts: Any,
    ) -> ResolutionContext:
        facts.setdefault("name", "master1.example.com")
        facts.setdefault("groups", ("oo_masters_to_config",))
        return ResolutionContext(
            inputs=inputs or RawInputs(),
            facts=HostFacts(**facts),
            package_query=StaticPackageQuery(packages or {}),
            image_query=StaticImageQuery(tags or {}),
        )

    return _make
