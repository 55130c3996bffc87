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

"""Version strategy for containerized installs.

Resolution order when no earlier rule has set a version:

1. openshift_image_tag (anything but "latest"): "v3.6.1-4" -> "3.6.1".
2. openshift_release: "3.6" is taken as the candidate version.
3. Otherwise ask the CLI image's ``latest`` tag which version it carries.

A two-component candidate such as "3.6" is then made precise by asking the
``v3.6`` image for its full version. Any "+commit" offset is dropped, and
versions older than 3.1 are refused.

Origin images report prerelease builds as ``v3.7.0-alpha.1-321-gb095e3a``;
for Origin the prerelease part is kept ("3.7.0-alpha.1"), for Enterprise
everything after the first dash is dropped.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ocpversion.exceptions import UnsupportedVersionError
from ocpversion.logging import get_global_logger
from ocpversion.models import ORIGIN
from ocpversion.versioning.keys import is_older_than
from ocpversion.versioning.normalize import (
    chomp_commit_offset,
    strip_leading_v,
    version_from_image_tag,
)

from .base import register_strategy

if TYPE_CHECKING:
    from ocpversion.models import ResolutionContext
    from ocpversion.resolution.state import ResolvedState

DEFAULT_CLI_IMAGES: dict[str, str] = {
    "origin": "openshift/origin",
    "openshift-enterprise": "openshift3/ose",
    "enterprise": "openshift3/ose",
}

MINIMUM_CONTAINERIZED_VERSION = "3.1"


def version_from_report(reported: str, deployment_type: str) -> str:
    """Turn an image's reported version token into a version string.

    Args:
        reported: Token from ``openshift version`` (e.g. "v3.6.1+c4dd4cf").
        deployment_type: Origin keeps a prerelease component, Enterprise
            does not.

    Returns:
        The version without leading "v" or commit offset.
    """
    parts = strip_leading_v(reported).split("-")
    if deployment_type == ORIGIN and len(parts) > 1:
        version = "-".join(parts[:2])
    else:
        version = parts[0]
    return chomp_commit_offset(version)


def cli_image_for(ctx: ResolutionContext) -> str:
    """CLI image used for version lookups, defaulting by deployment type."""
    if ctx.facts.cli_image:
        return ctx.facts.cli_image
    return DEFAULT_CLI_IMAGES.get(ctx.facts.deployment_type, "openshift/origin")


class ContainerizedVersionStrategy:
    """Resolve the version of a containerized install."""

    def resolve_version(self, ctx: ResolutionContext, state: ResolvedState) -> None:
        logger = get_global_logger()
        logger.verbose("IMAGE", "Strategy: containerized")

        if state.version is not None:
            logger.verbose(
                "IMAGE",
                f"Keeping version {state.version} ({state.version_source})",
            )
            return

        deployment_type = ctx.facts.deployment_type
        image = cli_image_for(ctx)

        if state.image_tag is not None and state.image_tag != "latest":
            candidate = version_from_image_tag(state.image_tag)
            source = "image_tag"
            logger.verbose(
                "IMAGE", f"Using openshift_image_tag {state.image_tag} -> {candidate}"
            )
        elif state.release is not None:
            candidate = state.release
            source = "release"
            logger.verbose("IMAGE", f"Using openshift_release {candidate}")
        else:
            reported = ctx.image_query.lookup(image, "latest")
            candidate = version_from_report(reported, deployment_type)
            source = "image_lookup"
            logger.verbose("IMAGE", f"{image}:latest carries {candidate}")

        # "3.6" -> the newest 3.6.z the v3.6 image carries
        if len(candidate.split(".")) == 2:
            reported = ctx.image_query.lookup(image, f"v{candidate}")
            precise = version_from_report(reported, deployment_type)
            logger.verbose("IMAGE", f"{image}:v{candidate} carries {precise}")
            candidate = precise
            source = "image_lookup"

        candidate = chomp_commit_offset(candidate)

        if is_older_than(candidate, MINIMUM_CONTAINERIZED_VERSION):
            raise UnsupportedVersionError(
                candidate, MINIMUM_CONTAINERIZED_VERSION, host=ctx.facts.name
            )

        state.set_version(candidate, source)


# Register this strategy when the module is imported
register_strategy("containerized", ContainerizedVersionStrategy)
