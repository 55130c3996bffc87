"""
Tests for ocpversion.core module.

Tests include:
- Building inputs, facts and backends from a merged profile
- resolve_host end to end with static backends
- resolve_hosts isolating per-host failures
"""

from __future__ import annotations

import copy
from unittest.mock import patch

import pytest

from ocpversion.core import (
    as_flag,
    build_context,
    build_facts,
    build_image_query,
    build_inputs,
    build_package_query,
    resolve_host,
    resolve_hosts,
)
from ocpversion.exceptions import (
    ConfigError,
    PackageNotFoundError,
    ReleaseMismatchError,
)
from ocpversion.query import (
    DockerCliBackend,
    RepoqueryBackend,
    StaticImageQuery,
    StaticPackageQuery,
)


class TestBuildContext:
    """Tests for turning a profile into a resolution context."""

    def test_inputs_from_vars(self):
        """Test that openshift_* vars become RawInputs."""
        inputs = build_inputs(
            {
                "vars": {
                    "openshift_release": "v3.6",
                    "openshift_image_tag": "v3.6.1",
                    "openshift_upgrade_target": "3.7",
                }
            }
        )

        assert inputs.release == "v3.6"
        assert inputs.image_tag == "v3.6.1"
        assert inputs.version is None
        assert inputs.upgrade_target == "3.7"

    def test_facts_from_profile(self, sample_profile_data):
        """Test that host, facts and policy vars become HostFacts."""
        data = copy.deepcopy(sample_profile_data)
        data["facts"]["version"] = "3.6.0"
        data["vars"]["openshift_protect_installed_version"] = False

        facts = build_facts(data)

        assert facts.name == "master1.example.com"
        assert facts.groups == ("oo_masters_to_config",)
        assert facts.in_scope is True
        assert facts.installed_version == "3.6.0"
        assert facts.protect_installed_version is False
        assert facts.install_base_package is False

    def test_service_type_defaults_to_deployment_type(self):
        """Test the service type fallback."""
        facts = build_facts(
            {
                "host": {"name": "n"},
                "facts": {"deployment_type": "openshift-enterprise"},
            }
        )

        assert facts.service_type == "openshift-enterprise"

    def test_quoted_flags_read_as_booleans(self):
        """Test that quoted "false"/"no" flags mean False, not True."""
        facts = build_facts(
            {
                "host": {"name": "n1"},
                "facts": {"is_containerized": "false", "is_atomic": "No"},
                "vars": {
                    "openshift_protect_installed_version": "false",
                    "version_install_base_package": "yes",
                },
            }
        )

        assert facts.is_containerized is False
        assert facts.is_atomic is False
        assert facts.protect_installed_version is False
        assert facts.install_base_package is True

    @pytest.mark.parametrize(
        "value, expected",
        [(True, True), (0, False), (1, True), ("ON", True), ("off", False)],
    )
    def test_as_flag_values(self, value, expected):
        """Test the accepted spellings of a flag."""
        assert as_flag(value, "facts.is_containerized", False) is expected

    def test_as_flag_default(self):
        """Test that an unset flag takes its default."""
        assert as_flag(None, "vars.openshift_protect_installed_version", True)

    def test_unrecognised_flag(self):
        """Test that a flag that is neither true nor false is rejected."""
        with pytest.raises(ConfigError, match="facts.is_containerized"):
            build_facts(
                {"host": {"name": "n1"}, "facts": {"is_containerized": "maybe"}}
            )

    def test_single_group_name(self):
        """Test that a scalar group name is one group, not its characters."""
        facts = build_facts({"host": {"name": "n1", "groups": "oo_nodes_to_config"}})

        assert facts.groups == ("oo_nodes_to_config",)
        assert facts.in_scope is True

    def test_malformed_groups(self):
        """Test that groups must be names."""
        with pytest.raises(ConfigError, match="host.groups"):
            build_facts({"host": {"name": "n1", "groups": {"oo_nodes_to_config": 1}}})

    def test_missing_host_name(self):
        """Test that a host needs a name."""
        with pytest.raises(ConfigError, match="host.name"):
            build_facts({"host": {}})

    def test_section_must_be_mapping(self):
        """Test that a non-mapping section is rejected."""
        with pytest.raises(ConfigError, match="'vars' must be a mapping"):
            build_inputs({"vars": ["openshift_release"]})

    def test_default_backends(self):
        """Test that repoquery and docker are the default backends."""
        assert isinstance(build_package_query({}), RepoqueryBackend)
        assert isinstance(build_image_query({}), DockerCliBackend)

    def test_static_backends(self, sample_profile_data):
        """Test that static backends answer from the profile."""
        packages = build_package_query(sample_profile_data)
        images = build_image_query(sample_profile_data)

        assert isinstance(packages, StaticPackageQuery)
        assert isinstance(images, StaticImageQuery)
        assert packages.query("origin").latest_version == "3.6.1"

    def test_custom_executable(self):
        """Test that the backend executable can be configured."""
        backend = build_package_query(
            {"repository": {"backend": "repoquery", "executable": "dnf-repoquery"}}
        )
        assert backend.executable == "dnf-repoquery"

    def test_unknown_backend(self):
        """Test that an unknown backend raises ConfigError."""
        with pytest.raises(ConfigError, match="Unknown repository backend"):
            build_package_query({"repository": {"backend": "apt"}})
        with pytest.raises(ConfigError, match="Unknown images backend"):
            build_image_query({"images": {"backend": "podman"}})

    def test_overrides(self, sample_profile_data):
        """Test that explicit collaborators replace the profile's."""
        packages = StaticPackageQuery({})
        images = StaticImageQuery({})

        ctx = build_context(sample_profile_data, packages, images)

        assert ctx.package_query is packages
        assert ctx.image_query is images


class TestResolveHost:
    """Tests for resolve_host."""

    def test_resolve_from_profile(self, create_yaml_file, sample_profile_data):
        """Test resolving a native master end to end."""
        profile = create_yaml_file("master1.yaml", sample_profile_data)

        result = resolve_host(profile)

        assert result.host == "master1.example.com"
        assert result.release == "3.6"
        assert result.version == "3.6.1"
        assert result.image_tag == "v3.6.1"
        assert result.pkg_version == "-3.6.1"

    def test_unquoted_release_from_yaml(self, tmp_test_dir):
        """Test that release 3.10 in YAML is not read as 3.1."""
        profile = tmp_test_dir / "node.yaml"
        profile.write_text(
            "host:\n  name: node1\n  groups: [oo_nodes_to_config]\n"
            "vars:\n  openshift_release: 3.10\n"
            "repository:\n  backend: static\n  packages:\n    origin: [3.10.0]\n"
        )

        result = resolve_host(profile)

        assert result.release == "3.10"
        assert result.version == "3.10.0"

    def test_quoted_false_native_node(self, create_yaml_file):
        """Test that is_containerized: "false" resolves as a native node."""
        profile = create_yaml_file(
            "node1.yaml",
            {
                "host": {"name": "node1", "groups": "oo_nodes_to_config"},
                "facts": {"is_containerized": "false"},
                "vars": {"openshift_protect_installed_version": "false"},
                "repository": {
                    "backend": "static",
                    "packages": {"origin": ["3.6.1"]},
                },
            },
        )

        result = resolve_host(profile)

        assert result.version == "3.6.1"
        assert result.image_tag == "v3.6.1"
        assert result.pkg_version == "-3.6.1"

    def test_errors_propagate(self, create_yaml_file, sample_profile_data):
        """Test that resolution errors reach the caller."""
        data = copy.deepcopy(sample_profile_data)
        data["vars"]["openshift_release"] = "3.5"
        profile = create_yaml_file("master1.yaml", data)

        with pytest.raises(ReleaseMismatchError):
            resolve_host(profile)

    def test_repoquery_backend_used(self, create_yaml_file, sample_profile_data):
        """Test that the repoquery backend is called when configured."""
        data = copy.deepcopy(sample_profile_data)
        data["repository"] = {"backend": "repoquery"}
        profile = create_yaml_file("master1.yaml", data)

        with patch.object(RepoqueryBackend, "query") as mock_query:
            mock_query.return_value = StaticPackageQuery({"origin": ["3.6.1"]}).query(
                "origin"
            )
            result = resolve_host(profile)

        mock_query.assert_called_once_with("origin")
        assert result.version == "3.6.1"


class TestResolveHosts:
    """Tests for resolve_hosts."""

    def test_failures_isolated(self, create_yaml_file, sample_profile_data):
        """Test that one failing host does not stop the others."""
        good = create_yaml_file("good.yaml", sample_profile_data)
        data = copy.deepcopy(sample_profile_data)
        data["host"]["name"] = "master2.example.com"
        data["repository"]["packages"] = {}
        bad = create_yaml_file("bad.yaml", data)
        missing = good.parent / "missing.yaml"

        outcomes = resolve_hosts([bad, good, missing])

        assert [o.ok for o in outcomes] == [False, True, False]
        assert isinstance(outcomes[0].error, PackageNotFoundError)
        assert outcomes[0].error.host == "master2.example.com"
        assert outcomes[1].result.version == "3.6.1"
        assert isinstance(outcomes[2].error, ConfigError)
        assert [o.profile_path for o in outcomes] == [bad, good, missing]
