"""
Tests for ocpversion.validation module.

Tests host profile validation including:
- Valid profiles
- Missing and unsupported apiVersion
- Host, facts and vars structure
- Image tag format
- Backend names
"""

from __future__ import annotations

import copy

from ocpversion.validation import validate_host_profile


def _validate(create_yaml_file, data):
    return validate_host_profile(create_yaml_file("host.yaml", data))


class TestValidProfiles:
    """Tests for profiles that pass validation."""

    def test_sample_profile_valid(self, create_yaml_file, sample_profile_data):
        """Test that the sample profile is valid."""
        result = _validate(create_yaml_file, sample_profile_data)

        assert result.status == "valid"
        assert result.errors == []
        assert result.host == "master1.example.com"
        assert result.profile_path.endswith("host.yaml")

    def test_single_group_and_quoted_flags(
        self, create_yaml_file, sample_profile_data
    ):
        """Test that a scalar group and quoted booleans are accepted."""
        data = copy.deepcopy(sample_profile_data)
        data["host"]["groups"] = "oo_masters_to_config"
        data["facts"]["is_containerized"] = "false"
        data["vars"]["openshift_image_tag"] = "v3.6.1"

        result = _validate(create_yaml_file, data)

        assert result.status == "valid", result.errors
        assert not any("master or node group" in w for w in result.warnings)
        assert any("containerized installs" in w for w in result.warnings)

    def test_defaults_contribute(
        self, tmp_test_dir, create_yaml_file, sample_inventory_defaults
    ):
        """Test that fields may come from inventory defaults."""
        create_yaml_file("defaults/all.yaml", sample_inventory_defaults)
        profile = create_yaml_file(
            "hosts/node1.yaml",
            {"host": {"name": "node1", "groups": ["oo_nodes_to_config"]}},
        )

        result = validate_host_profile(profile)

        assert result.status == "valid", result.errors


class TestInvalidProfiles:
    """Tests for profiles that fail validation."""

    def test_missing_file(self, tmp_test_dir):
        """Test that a missing file is reported, not raised."""
        result = validate_host_profile(tmp_test_dir / "missing.yaml")

        assert result.status == "invalid"
        assert "file not found" in result.errors[0]

    def test_missing_api_version(self, create_yaml_file, sample_profile_data):
        """Test that apiVersion is required."""
        data = copy.deepcopy(sample_profile_data)
        del data["apiVersion"]

        result = _validate(create_yaml_file, data)

        assert result.status == "invalid"
        assert any("apiVersion" in e for e in result.errors)

    def test_unsupported_api_version(self, create_yaml_file, sample_profile_data):
        """Test that only known apiVersions are accepted."""
        data = copy.deepcopy(sample_profile_data)
        data["apiVersion"] = "ocpversion/v9"

        result = _validate(create_yaml_file, data)

        assert any("Unsupported apiVersion" in e for e in result.errors)

    def test_missing_host_name(self, create_yaml_file, sample_profile_data):
        """Test that host.name is required."""
        data = copy.deepcopy(sample_profile_data)
        del data["host"]["name"]

        result = _validate(create_yaml_file, data)

        assert "Missing required field: host.name" in result.errors
        assert result.host is None

    def test_groups_must_be_names(self, create_yaml_file, sample_profile_data):
        """Test that host.groups must be a list of names."""
        data = copy.deepcopy(sample_profile_data)
        data["host"]["groups"] = [{"name": "oo_masters_to_config"}]

        result = _validate(create_yaml_file, data)

        assert "host.groups must be a list of group names" in result.errors

    def test_unrecognised_flag(self, create_yaml_file, sample_profile_data):
        """Test that a flag spelled neither true nor false is an error."""
        data = copy.deepcopy(sample_profile_data)
        data["vars"]["openshift_protect_installed_version"] = "sometimes"

        result = _validate(create_yaml_file, data)

        assert (
            "vars.openshift_protect_installed_version must be true or false"
            in result.errors
        )

    def test_fact_flags_must_be_bool(self, create_yaml_file, sample_profile_data):
        """Test that is_containerized must be a boolean."""
        data = copy.deepcopy(sample_profile_data)
        data["facts"]["is_containerized"] = "yes please"

        result = _validate(create_yaml_file, data)

        assert "facts.is_containerized must be true or false" in result.errors

    def test_var_must_be_scalar(self, create_yaml_file, sample_profile_data):
        """Test that version vars must be scalars."""
        data = copy.deepcopy(sample_profile_data)
        data["vars"]["openshift_version"] = ["3.6.1"]

        result = _validate(create_yaml_file, data)

        assert any(
            "vars.openshift_version must be a scalar" in e for e in result.errors
        )

    def test_bad_image_tag(self, create_yaml_file, sample_profile_data):
        """Test that the image tag format is checked."""
        data = copy.deepcopy(sample_profile_data)
        data["facts"]["deployment_type"] = "openshift-enterprise"
        data["facts"]["is_containerized"] = True
        data["vars"]["openshift_image_tag"] = "3.6.1"

        result = _validate(create_yaml_file, data)

        assert result.status == "invalid"
        assert any("does not match the format" in e for e in result.errors)

    def test_ambiguous_containerized_origin(
        self, create_yaml_file, sample_profile_data
    ):
        """Test that containerized Origin without hints is flagged."""
        data = copy.deepcopy(sample_profile_data)
        data["facts"]["is_containerized"] = True
        data["vars"] = {}

        result = _validate(create_yaml_file, data)

        assert any("openshift_release or" in e for e in result.errors)

    def test_bare_v_release_is_unset(self, create_yaml_file, sample_profile_data):
        """Test that openshift_release "v" does not count as a release."""
        data = copy.deepcopy(sample_profile_data)
        data["facts"]["is_containerized"] = True
        data["vars"] = {"openshift_release": "v"}

        result = _validate(create_yaml_file, data)

        assert any("openshift_release or" in e for e in result.errors)

    def test_unknown_backend(self, create_yaml_file, sample_profile_data):
        """Test that backend names are checked."""
        data = copy.deepcopy(sample_profile_data)
        data["repository"] = {"backend": "apt"}
        data["images"] = {"backend": "static", "tags": ["latest"]}

        result = _validate(create_yaml_file, data)

        assert any("Unknown repository backend" in e for e in result.errors)
        assert "images.tags must be a mapping" in result.errors


class TestWarnings:
    """Tests for non-fatal findings."""

    def test_out_of_scope_host(self, create_yaml_file, sample_profile_data):
        """Test that hosts outside master/node groups are noted."""
        data = copy.deepcopy(sample_profile_data)
        data["host"]["groups"] = ["oo_etcd_to_config"]

        result = _validate(create_yaml_file, data)

        assert result.status == "valid"
        assert any("not in a master or node group" in w for w in result.warnings)

    def test_unknown_deployment_type(self, create_yaml_file, sample_profile_data):
        """Test that unknown deployment types are noted."""
        data = copy.deepcopy(sample_profile_data)
        data["facts"]["deployment_type"] = "custom"

        result = _validate(create_yaml_file, data)

        assert result.status == "valid"
        assert any("Unknown deployment_type" in w for w in result.warnings)

    def test_image_tag_on_native_host(self, create_yaml_file, sample_profile_data):
        """Test that an image tag on a native host is noted."""
        data = copy.deepcopy(sample_profile_data)
        data["vars"]["openshift_image_tag"] = "v3.6.1"

        result = _validate(create_yaml_file, data)

        assert result.status == "valid"
        assert any("containerized installs" in w for w in result.warnings)
