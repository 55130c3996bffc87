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

"""Public API return types for ocpversion.

All dataclasses are frozen (immutable) to prevent accidental mutation of
return values.

Example:
    Using result types:
        ```python
        from pathlib import Path
        from ocpversion.core import resolve_host

        result = resolve_host(Path("hosts/master1.yaml"))
        print(result.image_tag)  # Attribute access, not dict access
        ```

Note:
    Only public API return types belong in this module. Engine input types
    live in ocpversion.models and the working state in
    ocpversion.resolution.state.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ResolveResult:
    """Result of resolving one host.

    Attributes:
        host: Inventory hostname.
        version: Canonical version (openshift_version).
        image_tag: Image tag, "v"-prefixed (openshift_image_tag).
        pkg_version: Package version, "-"-prefixed, or None during an
            upgrade (openshift_pkg_version).
        release: Normalized release without leading "v" (openshift_release).
        in_scope: False for hosts outside the master/node groups, which
            skip mechanism resolution and the completeness checks.
        version_source: Rule that chose the version (e.g., "requested",
            "installed", "rpm", "image_tag").
        rpm_version: Version the repository offered on a containerized,
            non-Atomic host.
        base_package: Package spec a native install would lay down for
            versioning (e.g., "origin-3.6.1"), when requested.
        warnings: Non-fatal findings.
        status: Always "success"; failures raise instead.
    """

    host: str
    version: str | None
    image_tag: str | None
    pkg_version: str | None
    release: str | None
    in_scope: bool
    version_source: str | None = None
    rpm_version: str | None = None
    base_package: str | None = None
    warnings: tuple[str, ...] = ()
    status: str = "success"

    def as_vars(self) -> dict[str, str]:
        """The resolved values under their inventory variable names.

        Unset values are left out.
        """
        pairs = {
            "openshift_version": self.version,
            "openshift_image_tag": self.image_tag,
            "openshift_pkg_version": self.pkg_version,
            "openshift_release": self.release,
        }
        return {k: v for k, v in pairs.items() if v is not None}


@dataclass(frozen=True)
class ValidationResult:
    """Result from validating a host profile.

    Attributes:
        status: Validation status ("valid" or "invalid").
        errors: List of error messages (empty if valid).
        warnings: List of warning messages.
        host: Host name from the profile, if one could be read.
        profile_path: String path to the validated profile.
    """

    status: str
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    host: str | None = None
    profile_path: str = ""
