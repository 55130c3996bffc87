# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Derivation of dependent identifiers and the terminal completeness checks.

Once the canonical version is known, the image tag and package version are
derived from it unless the user supplied them:

- image_tag = "v" + version
- pkg_version = "-" + version (skipped during an upgrade, which owns the
    package version itself)

Afterwards every downstream consumer may assume the values are set, so the
guard asserts exactly that, plus two checks specific to native installs.
"""

from __future__ import annotations

from ocpversion.exceptions import (
    ImageTagUnresolvedError,
    NoVersionAvailableError,
    PkgVersionUnresolvedError,
    ReleaseMismatchError,
    VersionUnresolvedError,
)
from ocpversion.logging import get_global_logger
from ocpversion.models import NO_VERSION_SENTINEL, ResolutionContext

from .state import ResolvedState


def derive_dependents(ctx: ResolutionContext, state: ResolvedState) -> None:
    """Fill image_tag and pkg_version from the version where unset."""
    logger = get_global_logger()
    if not state.version:
        return

    if state.image_tag is None:
        logger.verbose(
            "DERIVE",
            f"openshift_image_tag was not defined. Falling back to v{state.version}",
        )
        state.image_tag = f"v{state.version}"

    if state.pkg_version is None and ctx.inputs.upgrade_target is None:
        logger.verbose(
            "DERIVE",
            f"openshift_pkg_version was not defined. Falling back to "
            f"-{state.version}",
        )
        state.pkg_version = f"-{state.version}"


def assert_complete(ctx: ResolutionContext, state: ResolvedState) -> None:
    """Enforce the terminal invariants.

    Raises:
        VersionUnresolvedError: No version was resolved.
        ImageTagUnresolvedError: No image tag was resolved.
        PkgVersionUnresolvedError: No package version outside an upgrade.
        NoVersionAvailableError: A native install only found "0.0".
        ReleaseMismatchError: A native install's version does not start
            with the requested release.
    """
    host = ctx.facts.name
    if not state.version:
        raise VersionUnresolvedError(
            "openshift_version role was unable to set openshift_version", host=host
        )
    if not state.image_tag:
        raise ImageTagUnresolvedError(
            "openshift_version role was unable to set openshift_image_tag",
            host=host,
        )
    if not state.pkg_version and ctx.inputs.upgrade_target is None:
        raise PkgVersionUnresolvedError(
            "openshift_version role was unable to set openshift_pkg_version",
            host=host,
        )

    if ctx.facts.is_containerized:
        return

    if state.version == NO_VERSION_SENTINEL:
        raise NoVersionAvailableError(
            "No OpenShift version available; please ensure your systems are "
            "fully registered and have access to appropriate yum repositories.",
            host=host,
        )

    # Loose prefix match: release "3.1" also accepts "3.10.0"
    if state.release is not None and not state.version.startswith(state.release):
        raise ReleaseMismatchError(
            state.release,
            state.version,
            service_type=ctx.facts.service_type,
            host=host,
        )
