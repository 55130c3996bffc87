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

"""RPM/image version agreement for containerized hosts.

A containerized, non-Atomic host still has an RPM layer. The version the
package repository offers and the version resolved for the images must be
the same string, unless the user explicitly supplied openshift_pkg_version
or openshift_image_tag; either one says the two may differ.
"""

from __future__ import annotations

from ocpversion.exceptions import VersionMismatchError
from ocpversion.logging import get_global_logger
from ocpversion.models import ResolutionContext

from .state import ResolvedState


def check_consistency(ctx: ResolutionContext, state: ResolvedState) -> None:
    """Fail when the RPM and image versions disagree without an override.

    Args:
        ctx: Resolution context with normalized inputs.
        state: State after the source rules have run.

    Raises:
        VersionMismatchError: If ``state.rpm_version != state.version`` and
            neither openshift_pkg_version nor openshift_image_tag was given.
    """
    logger = get_global_logger()
    if not (ctx.facts.is_containerized and not ctx.facts.is_atomic):
        return
    if state.rpm_version is None:
        return

    if state.rpm_version == state.version:
        logger.verbose(
            "CONSISTENCY", f"RPM and image versions agree: {state.version}"
        )
        return

    overridden = [
        name
        for name, value in (
            ("openshift_pkg_version", ctx.inputs.pkg_version),
            ("openshift_image_tag", ctx.inputs.image_tag),
        )
        if value is not None
    ]
    if overridden:
        logger.verbose(
            "CONSISTENCY",
            f"RPM version {state.rpm_version} differs from image version "
            f"{state.version}; allowed by {', '.join(overridden)}",
        )
        return

    raise VersionMismatchError(
        state.rpm_version, str(state.version), host=ctx.facts.name
    )
