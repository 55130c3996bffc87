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

"""Input types for the version resolution engine.

Everything the engine reads about a host is captured here as frozen
dataclasses and handed to the engine in a single ResolutionContext. The
engine never consults global state, so resolving a host is a pure function
of its context and the answers its collaborators give.

Example:
    Building a context by hand:
        ```python
        from ocpversion.models import HostFacts, RawInputs, ResolutionContext
        from ocpversion.query import StaticImageQuery, StaticPackageQuery

        ctx = ResolutionContext(
            inputs=RawInputs(release="v3.6"),
            facts=HostFacts(
                name="master1.example.com",
                deployment_type="origin",
                service_type="origin",
                groups=("oo_masters_to_config",),
            ),
            package_query=StaticPackageQuery({"origin": ["3.6.1"]}),
            image_query=StaticImageQuery({}),
        )
        ```
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from ocpversion.query import ImageQuery, PackageQuery

ORIGIN = "origin"
ENTERPRISE = "openshift-enterprise"

# Host groups that run the full resolution (mechanism, consistency, guard)
MASTER_NODE_GROUPS: tuple[str, ...] = ("oo_masters_to_config", "oo_nodes_to_config")

# Returned by repository queries that report no versions at all
NO_VERSION_SENTINEL = "0.0"

# Inventory values may arrive as numbers before normalization
RawValue = Union[str, int, float, None]


@dataclass(frozen=True)
class RawInputs:
    """User-supplied version inputs, exactly as given.

    Attributes:
        release: openshift_release, a version prefix such as "3.6" or "v3.6".
        image_tag: openshift_image_tag, e.g. "v3.6.1".
        version: openshift_version, an explicit canonical version.
        pkg_version: openshift_pkg_version, e.g. "-3.6.1".
        upgrade_target: openshift_upgrade_target; when set, an upgrade flow
            owns the package version.
    """

    release: RawValue = None
    image_tag: RawValue = None
    version: RawValue = None
    pkg_version: RawValue = None
    upgrade_target: RawValue = None


@dataclass(frozen=True)
class HostFacts:
    """Facts observed on the target host plus host-level policy flags.

    Attributes:
        name: Inventory hostname, used in error messages.
        is_containerized: Components run as container images.
        is_atomic: Host is an Atomic host (no RPM layer to cross-check).
        installed_version: Version already installed, if any.
        deployment_type: "origin" or "openshift-enterprise".
        service_type: Base package / service name (e.g., "origin",
            "atomic-openshift").
        protect_installed_version: Keep the installed version unless an
            explicit openshift_version is given.
        install_base_package: Report the base package spec a native install
            would lay down.
        groups: Inventory groups the host belongs to.
        cli_image: Image used to ask containerized releases for their version.
    """

    name: str
    is_containerized: bool = False
    is_atomic: bool = False
    installed_version: str | None = None
    deployment_type: str = ORIGIN
    service_type: str = ORIGIN
    protect_installed_version: bool = True
    install_base_package: bool = False
    groups: tuple[str, ...] = ()
    cli_image: str | None = None

    @property
    def in_scope(self) -> bool:
        """True when the host is a master or node being configured."""
        return any(group in MASTER_NODE_GROUPS for group in self.groups)


@dataclass(frozen=True)
class PackageQueryResult:
    """Answer from the package repository for a single package name.

    Attributes:
        package_found: The repository knows the package at all.
        available_versions: Versions on offer, newest first.
    """

    package_found: bool
    available_versions: tuple[str, ...] = ()

    @property
    def latest_version(self) -> str:
        """Newest available version, or "0.0" when none were reported."""
        if self.available_versions:
            return self.available_versions[0]
        return NO_VERSION_SENTINEL


@dataclass(frozen=True)
class ResolutionContext:
    """Everything one host's resolution is allowed to look at.

    Attributes:
        inputs: User-supplied version inputs.
        facts: Host facts and policy flags.
        package_query: Package repository collaborator.
        image_query: Container image version collaborator.
    """

    inputs: RawInputs
    facts: HostFacts
    package_query: PackageQuery
    image_query: ImageQuery
