"""
Tests for ocpversion.cli module.

Runs the argparse entry point with explicit argument lists and checks exit
codes and the printed results blocks.
"""

from __future__ import annotations

import copy

import pytest

from ocpversion.cli import main


def _run(argv: list[str]) -> int:
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    return exc_info.value.code


class TestValidateCommand:
    """Tests for 'ocpversion validate'."""

    def test_valid_profile(self, create_yaml_file, sample_profile_data, capsys):
        """Test that a valid profile exits 0."""
        profile = create_yaml_file("master1.yaml", sample_profile_data)

        code = _run(["validate", str(profile)])

        out = capsys.readouterr().out
        assert code == 0
        assert "VALIDATION RESULTS" in out
        assert "master1.example.com" in out
        assert "[SUCCESS]" in out

    def test_invalid_profile(self, create_yaml_file, sample_profile_data, capsys):
        """Test that an invalid profile exits 1 and lists errors."""
        data = copy.deepcopy(sample_profile_data)
        data["apiVersion"] = "ocpversion/v0"
        profile = create_yaml_file("master1.yaml", data)

        code = _run(["validate", str(profile)])

        out = capsys.readouterr().out
        assert code == 1
        assert "[X] Unsupported apiVersion" in out
        assert "[FAILED]" in out


class TestResolveCommand:
    """Tests for 'ocpversion resolve'."""

    def test_resolve_prints_values(self, create_yaml_file, sample_profile_data, capsys):
        """Test that release, image tag and package version are shown."""
        profile = create_yaml_file("master1.yaml", sample_profile_data)

        code = _run(["resolve", str(profile)])

        out = capsys.readouterr().out
        assert code == 0
        assert "RESOLUTION RESULTS: master1.example.com" in out
        assert "openshift_release:      3.6" in out
        assert "openshift_image_tag:    v3.6.1" in out
        assert "openshift_pkg_version:  -3.6.1" in out
        assert "[SUCCESS] Resolved 1 host(s)!" in out

    def test_upgrade_shows_undefined(
        self, create_yaml_file, sample_profile_data, capsys
    ):
        """Test that an unset package version is still displayed."""
        data = copy.deepcopy(sample_profile_data)
        data["vars"]["openshift_upgrade_target"] = "3.7"
        profile = create_yaml_file("master1.yaml", data)

        code = _run(["resolve", str(profile)])

        out = capsys.readouterr().out
        assert code == 0
        assert "openshift_pkg_version:  (undefined)" in out

    def test_one_failure_exits_1(self, create_yaml_file, sample_profile_data, capsys):
        """Test that other hosts still resolve when one fails."""
        good = create_yaml_file("good.yaml", sample_profile_data)
        data = copy.deepcopy(sample_profile_data)
        data["host"]["name"] = "master2.example.com"
        data["vars"]["openshift_release"] = "3.5"
        bad = create_yaml_file("bad.yaml", data)

        code = _run(["resolve", str(bad), str(good)])

        out = capsys.readouterr().out
        assert code == 1
        assert "RESOLUTION FAILED" in out
        assert "openshift_release 3.5" in out
        assert "RESOLUTION RESULTS: master1.example.com" in out
        assert "[FAILED] 1 of 2 host(s) failed to resolve." in out

    def test_verbose_output(self, create_yaml_file, sample_profile_data, capsys):
        """Test that verbose mode prints progress prefixes."""
        profile = create_yaml_file("master1.yaml", sample_profile_data)

        _run(["resolve", "--verbose", str(profile)])

        out = capsys.readouterr().out
        assert "[1/3] Loading host profile..." in out
        assert "[CONFIG]" in out
        assert "[RPM]" in out


class TestCheckTagCommand:
    """Tests for 'ocpversion check-tag'."""

    def test_valid_tag(self, capsys):
        """Test an accepted enterprise tag."""
        code = _run(
            ["check-tag", "v3.6.1-4.5", "--deployment-type", "openshift-enterprise"]
        )

        assert code == 0
        assert "[SUCCESS]" in capsys.readouterr().out

    def test_invalid_tag(self, capsys):
        """Test a rejected enterprise tag."""
        code = _run(["check-tag", "3.6.1", "--deployment-type", "openshift-enterprise"])

        out = capsys.readouterr().out
        assert code == 1
        assert "openshift_image_tag=3.6.1" in out

    def test_unknown_deployment_type(self, capsys):
        """Test that unknown deployment types accept any tag."""
        code = _run(["check-tag", "whatever", "--deployment-type", "custom"])

        assert code == 0
        assert "No tag format is defined" in capsys.readouterr().out


class TestGlobalOptions:
    """Tests for top-level options."""

    def test_version(self, capsys):
        """Test that --version prints the installed version."""
        code = _run(["--version"])

        assert code == 0
        assert capsys.readouterr().out.startswith("ocpversion ")

    def test_command_required(self):
        """Test that a command is required."""
        assert _run([]) == 2
