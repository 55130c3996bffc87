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

"""Exception hierarchy for ocpversion.

This module defines a custom exception hierarchy that allows library users
to distinguish between different types of errors:

- ConfigError: Host profile problems (YAML parse, missing fields, bad types)
- QueryError: Package repository or image lookups that could not be run
- ResolutionError: The host's inputs cannot produce a consistent version
    triple. Every subclass is fatal for the host being resolved.

All exceptions inherit from OCPVersionError, allowing users to catch all
ocpversion errors with a single except clause if needed.

Example:
    Catching specific error types:
        ```python
        from pathlib import Path
        from ocpversion.core import resolve_host
        from ocpversion.exceptions import ConfigError, ResolutionError

        try:
            result = resolve_host(Path("hosts/master1.yaml"))
        except ConfigError as e:
            print(f"Configuration error: {e}")
        except ResolutionError as e:
            print(f"Cannot resolve {e.host}: {e}")
        ```

    Catching all ocpversion errors:
        ```python
        from ocpversion.exceptions import OCPVersionError

        try:
            result = resolve_host(Path("hosts/master1.yaml"))
        except OCPVersionError as e:
            print(f"ocpversion error: {e}")
        ```
"""

from __future__ import annotations

__all__ = [
    "OCPVersionError",
    "ConfigError",
    "QueryError",
    "ResolutionError",
    "AmbiguousVersionError",
    "FormatError",
    "PackageNotFoundError",
    "VersionMismatchError",
    "UnsupportedVersionError",
    "StateOverwriteError",
    "CompletenessError",
    "VersionUnresolvedError",
    "ImageTagUnresolvedError",
    "PkgVersionUnresolvedError",
    "NoVersionAvailableError",
    "ReleaseMismatchError",
]


class OCPVersionError(Exception):
    """Base exception for all ocpversion errors.

    All ocpversion-specific exceptions inherit from this class, allowing
    users to catch all errors with a single except clause if needed.
    """

    pass


class ConfigError(OCPVersionError):
    """Raised for configuration-related errors.

    This exception is raised when there are problems with:

    - YAML parsing (syntax errors, invalid structure)
    - Missing host profile files
    - Missing or invalid fields (wrong types, unknown backends)

    Example:
        Catching configuration errors:
            ```python
            from ocpversion.exceptions import ConfigError

            try:
                config = load_effective_config(Path("invalid.yaml"))
            except ConfigError as e:
                print(f"Config error: {e}")
            ```
    """

    pass


class QueryError(OCPVersionError):
    """Raised when a package or image lookup cannot be performed.

    This covers a missing ``repoquery``/``docker`` binary, a command that
    exits non-zero, or output that cannot be parsed. It is distinct from
    PackageNotFoundError, which means the query ran and found nothing.
    """

    pass


class ResolutionError(OCPVersionError):
    """Base class for fatal resolution outcomes.

    Attributes:
        host: Name of the host whose resolution was aborted, when known.
    """

    def __init__(self, message: str, *, host: str | None = None) -> None:
        super().__init__(message)
        self.host = host


class AmbiguousVersionError(ResolutionError):
    """Raised for a containerized Origin install with no version hint.

    Origin's ``latest`` images are usually alpha builds, so a release or
    image tag must be given explicitly.
    """

    pass


class FormatError(ResolutionError):
    """Raised when an image tag does not match its deployment-type grammar.

    Attributes:
        value: The rejected image tag.
        expected: Human-readable description of the accepted format.
        deployment_type: Deployment type whose grammar was applied.
    """

    def __init__(
        self,
        value: str,
        expected: str,
        deployment_type: str,
        *,
        host: str | None = None,
    ) -> None:
        super().__init__(
            f"openshift_image_tag must be in the format {expected}\n"
            f"You specified openshift_image_tag={value}",
            host=host,
        )
        self.value = value
        self.expected = expected
        self.deployment_type = deployment_type


class PackageNotFoundError(ResolutionError):
    """Raised when the base package is absent from the package repository."""

    def __init__(self, package: str, *, host: str | None = None) -> None:
        super().__init__(f"Package {package} not found", host=host)
        self.package = package


class VersionMismatchError(ResolutionError):
    """Raised when the RPM and image versions disagree without an override."""

    def __init__(
        self, rpm_version: str, version: str, *, host: str | None = None
    ) -> None:
        super().__init__(
            f"OCP rpm version {rpm_version} is different from "
            f"OCP image version {version}",
            host=host,
        )
        self.rpm_version = rpm_version
        self.version = version


class UnsupportedVersionError(ResolutionError):
    """Raised when a resolved containerized version is too old to install."""

    def __init__(
        self, version: str, minimum: str, *, host: str | None = None
    ) -> None:
        super().__init__(
            f"OpenShift {version} is too old for containerized installation "
            f"(minimum {minimum}).",
            host=host,
        )
        self.version = version
        self.minimum = minimum


class StateOverwriteError(ResolutionError):
    """Raised when a resolved field would be assigned a second time."""

    def __init__(
        self, field: str, current: str, attempted: str, *, host: str | None = None
    ) -> None:
        super().__init__(
            f"Refusing to overwrite {field}={current!r} with {attempted!r}",
            host=host,
        )
        self.field = field


class CompletenessError(ResolutionError):
    """Base class for the terminal "value was never set" checks.

    Reaching one of these on a correctly configured host indicates a gap in
    the resolution rules rather than a user mistake.
    """

    pass


class VersionUnresolvedError(CompletenessError):
    """Raised when no rule produced openshift_version."""

    pass


class ImageTagUnresolvedError(CompletenessError):
    """Raised when openshift_image_tag is still unset after derivation."""

    pass


class PkgVersionUnresolvedError(CompletenessError):
    """Raised when openshift_pkg_version is unset outside an upgrade."""

    pass


class NoVersionAvailableError(ResolutionError):
    """Raised when a native install only found the "0.0" sentinel version."""

    pass


class ReleaseMismatchError(ResolutionError):
    """Raised when the resolved RPM version does not start with the release."""

    def __init__(
        self,
        release: str,
        version: str,
        *,
        service_type: str,
        host: str | None = None,
    ) -> None:
        super().__init__(
            f"You requested openshift_release {release}, which is not matched by\n"
            f"the latest OpenShift RPM we detected as {service_type}-{version}\n"
            f"on host {host}.\n"
            "We will only install the latest RPMs, so please ensure you are "
            "getting the release\nyou expect. You may need to adjust your "
            "inventory, modify the repositories\navailable on the host, or run "
            "the appropriate upgrade playbook.",
            host=host,
        )
        self.release = release
        self.version = version
