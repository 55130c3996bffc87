"""
Tests for ocpversion.resolution.guard module.

Tests include:
- Derivation of image tag and package version from the version
- Upgrade flows leaving the package version alone
- Completeness failures and native-only checks
"""

from __future__ import annotations

import pytest

from ocpversion.exceptions import (
    CompletenessError,
    ImageTagUnresolvedError,
    NoVersionAvailableError,
    PkgVersionUnresolvedError,
    ReleaseMismatchError,
    VersionUnresolvedError,
)
from ocpversion.models import RawInputs
from ocpversion.resolution.guard import assert_complete, derive_dependents
from ocpversion.resolution.state import ResolvedState


def _state(version: str | None = None, **kwargs) -> ResolvedState:
    state = ResolvedState(host="master1.example.com", **kwargs)
    if version is not None:
        state.set_version(version, "rpm")
    return state


class TestDeriveDependents:
    """Tests for derive_dependents."""

    def test_derivation_law(self, make_context):
        """Test that both identifiers are derived from the version."""
        state = _state("3.6.1")

        derive_dependents(make_context(), state)

        assert state.image_tag == "v3.6.1"
        assert state.pkg_version == "-3.6.1"

    def test_explicit_values_kept(self, make_context):
        """Test that user-supplied identifiers are never replaced."""
        state = _state("3.6.1", image_tag="v3.6.1-4", pkg_version="-3.6.1-1.el7")

        derive_dependents(make_context(), state)

        assert state.image_tag == "v3.6.1-4"
        assert state.pkg_version == "-3.6.1-1.el7"

    def test_upgrade_leaves_pkg_version_unset(self, make_context):
        """Test that an upgrade target owns the package version."""
        ctx = make_context(inputs=RawInputs(upgrade_target="3.7"))
        state = _state("3.6.1")

        derive_dependents(ctx, state)

        assert state.image_tag == "v3.6.1"
        assert state.pkg_version is None

    def test_no_version_derives_nothing(self, make_context):
        """Test that nothing is derived without a version."""
        state = _state()

        derive_dependents(make_context(), state)

        assert state.image_tag is None
        assert state.pkg_version is None


class TestCompleteness:
    """Tests for the terminal unset-value checks."""

    def test_complete_state_passes(self, make_context):
        """Test a fully resolved native host."""
        state = _state("3.6.1", image_tag="v3.6.1", pkg_version="-3.6.1")
        assert_complete(make_context(), state)

    def test_version_unresolved(self, make_context):
        """Test the missing version failure."""
        with pytest.raises(VersionUnresolvedError, match="openshift_version"):
            assert_complete(make_context(), _state())

    def test_image_tag_unresolved(self, make_context):
        """Test the missing image tag failure."""
        with pytest.raises(ImageTagUnresolvedError, match="openshift_image_tag"):
            assert_complete(make_context(), _state("3.6.1", pkg_version="-3.6.1"))

    def test_pkg_version_unresolved(self, make_context):
        """Test the missing package version failure."""
        with pytest.raises(PkgVersionUnresolvedError) as exc_info:
            assert_complete(make_context(), _state("3.6.1", image_tag="v3.6.1"))
        assert isinstance(exc_info.value, CompletenessError)

    def test_pkg_version_optional_during_upgrade(self, make_context):
        """Test that an upgrade does not require a package version."""
        ctx = make_context(inputs=RawInputs(upgrade_target="3.7"))
        assert_complete(ctx, _state("3.6.1", image_tag="v3.6.1"))


class TestNativeChecks:
    """Tests for the checks that only apply to native installs."""

    def test_sentinel_rejected(self, make_context):
        """Test that "0.0" means no package was really available."""
        state = _state("0.0", image_tag="v0.0", pkg_version="-0.0")

        with pytest.raises(NoVersionAvailableError, match="yum repositories"):
            assert_complete(make_context(), state)

    def test_sentinel_ignored_for_containerized(self, make_context):
        """Test that containerized hosts skip the native checks."""
        state = _state("0.0", image_tag="v0.0", pkg_version="-0.0")
        assert_complete(make_context(is_containerized=True), state)

    def test_release_mismatch(self, make_context):
        """Test that the version must start with the release."""
        state = _state(
            "3.7.0", image_tag="v3.7.0", pkg_version="-3.7.0", release="3.6"
        )

        with pytest.raises(ReleaseMismatchError) as exc_info:
            assert_complete(make_context(), state)

        err = exc_info.value
        assert err.release == "3.6"
        assert err.version == "3.7.0"
        assert "origin-3.7.0" in str(err)
        assert "master1.example.com" in str(err)

    def test_release_prefix_is_loose(self, make_context):
        """Test that release "3.1" accepts version "3.10.0"."""
        state = _state(
            "3.10.0", image_tag="v3.10.0", pkg_version="-3.10.0", release="3.1"
        )
        assert_complete(make_context(), state)

    def test_release_mismatch_ignored_for_containerized(self, make_context):
        """Test that containerized hosts skip the release check."""
        state = _state(
            "3.7.0", image_tag="v3.7.0", pkg_version="-3.7.0", release="3.6"
        )
        assert_complete(make_context(is_containerized=True), state)
