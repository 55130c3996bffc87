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

"""Version strategy for native package (RPM) installs.

Resolution order when no earlier rule has set a version:

1. openshift_pkg_version: "-3.6.1-1.el7" pins version "3.6.1".
2. Package repository: the newest available version of the host's
    service type package. An empty version list yields the "0.0"
    sentinel, which the completeness guard rejects with a clear message.

Example:
    ```yaml
    facts:
      is_containerized: false
      service_type: atomic-openshift
    vars:
      openshift_release: "3.6"
    repository:
      backend: repoquery
    ```
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ocpversion.exceptions import PackageNotFoundError
from ocpversion.logging import get_global_logger
from ocpversion.versioning.normalize import version_from_pkg_version

from .base import register_strategy

if TYPE_CHECKING:
    from ocpversion.models import ResolutionContext
    from ocpversion.resolution.state import ResolvedState


class RpmVersionStrategy:
    """Resolve the version of a native package install."""

    def resolve_version(self, ctx: ResolutionContext, state: ResolvedState) -> None:
        logger = get_global_logger()
        logger.verbose("RPM", "Strategy: rpm (native package install)")

        if state.version is not None:
            logger.verbose(
                "RPM",
                f"Keeping version {state.version} ({state.version_source})",
            )
            return

        if state.pkg_version is not None:
            version = version_from_pkg_version(state.pkg_version)
            logger.verbose(
                "RPM",
                f"Using openshift_pkg_version {state.pkg_version} -> {version}",
            )
            state.set_version(version, "pkg_version")
            return

        package = ctx.facts.service_type
        logger.verbose("RPM", f"Querying repository for {package}")
        result = ctx.package_query.query(package)
        if not result.package_found:
            raise PackageNotFoundError(package, host=ctx.facts.name)

        logger.verbose("RPM", f"Newest available {package}: {result.latest_version}")
        state.set_version(result.latest_version, "rpm")


# Register this strategy when the module is imported
register_strategy("rpm", RpmVersionStrategy)
