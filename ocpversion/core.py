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

"""Core orchestration for ocpversion.

This module turns host profiles into resolution contexts and runs the
engine for one or many hosts.

Design Principles:

- Each function has a single, clear responsibility
- Functions return structured data (dataclasses) for easy testing and extension
- Error handling uses exceptions; CLI layer formats for user display
- Collaborator backends are selected by name from the profile
- Each host is resolved in isolation; one host's failure never touches another

Example:
    Programmatic usage:
        ```python
        from pathlib import Path
        from ocpversion.core import resolve_host

        result = resolve_host(Path("inventory/hosts/master1.yaml"))

        print(f"Host: {result.host}")
        print(f"Version: {result.version}")
        print(f"Image tag: {result.image_tag}")
        ```
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ocpversion.config import load_effective_config
from ocpversion.exceptions import ConfigError, OCPVersionError
from ocpversion.logging import get_global_logger
from ocpversion.models import ORIGIN, HostFacts, RawInputs, ResolutionContext
from ocpversion.query import (
    DockerCliBackend,
    ImageQuery,
    PackageQuery,
    RepoqueryBackend,
    StaticImageQuery,
    StaticPackageQuery,
)
from ocpversion.resolution import resolve
from ocpversion.results import ResolveResult
from ocpversion.versioning.normalize import coerce_version

# Inventory variable names read into RawInputs
INPUT_VARS: dict[str, str] = {
    "release": "openshift_release",
    "image_tag": "openshift_image_tag",
    "version": "openshift_version",
    "pkg_version": "openshift_pkg_version",
    "upgrade_target": "openshift_upgrade_target",
}


def _repoquery_backend(section: dict[str, Any]) -> PackageQuery:
    return RepoqueryBackend(executable=section.get("executable", "repoquery"))


def _static_package_backend(section: dict[str, Any]) -> PackageQuery:
    return StaticPackageQuery(section.get("packages") or {})


def _docker_backend(section: dict[str, Any]) -> ImageQuery:
    return DockerCliBackend(executable=section.get("executable", "docker"))


def _static_image_backend(section: dict[str, Any]) -> ImageQuery:
    return StaticImageQuery(section.get("tags") or {})


PACKAGE_BACKENDS: dict[str, Callable[[dict[str, Any]], PackageQuery]] = {
    "repoquery": _repoquery_backend,
    "static": _static_package_backend,
}

IMAGE_BACKENDS: dict[str, Callable[[dict[str, Any]], ImageQuery]] = {
    "docker": _docker_backend,
    "static": _static_image_backend,
}


_TRUE_STRINGS = ("yes", "on", "1", "true")
_FALSE_STRINGS = ("no", "off", "0", "false", "")


def as_flag(value: Any, field: str, default: bool) -> bool:
    """Reads an inventory flag the way inventories spell booleans.

    Accepts real booleans, 0/1, and the strings yes/no, on/off, true/false
    and 1/0 in any case. None means the flag is not set.

    Raises:
        ConfigError: If the value is not recognisable as true or false.

    Example:
        ```python
        as_flag("False", "facts.is_containerized", False)  # False
        as_flag(None, "vars.openshift_protect_installed_version", True)  # True
        ```
    """
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    raise ConfigError(f"{field} must be true or false, got {value!r}")


def as_groups(value: Any) -> tuple[str, ...]:
    """Reads host.groups; a single group name counts as a one-item list.

    Raises:
        ConfigError: If groups is neither a name nor a list of names.
    """
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,) if value else ()
    if isinstance(value, list) and all(isinstance(g, str) for g in value):
        return tuple(value)
    raise ConfigError("host.groups must be a list of group names")


def _section(config: dict[str, Any], key: str) -> dict[str, Any]:
    value = config.get(key) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"'{key}' must be a mapping, got {type(value).__name__}")
    return value


def build_package_query(config: dict[str, Any]) -> PackageQuery:
    """Creates the package repository backend named in the profile.

    Defaults to repoquery when the profile does not name one.

    Raises:
        ConfigError: If the backend name is unknown.
    """
    section = _section(config, "repository")
    name = section.get("backend", "repoquery")
    try:
        factory = PACKAGE_BACKENDS[name]
    except KeyError:
        available = ", ".join(sorted(PACKAGE_BACKENDS))
        raise ConfigError(
            f"Unknown repository backend: {name!r}. Available: {available}"
        ) from None
    return factory(section)


def build_image_query(config: dict[str, Any]) -> ImageQuery:
    """Creates the image lookup backend named in the profile.

    Defaults to docker when the profile does not name one.

    Raises:
        ConfigError: If the backend name is unknown.
    """
    section = _section(config, "images")
    name = section.get("backend", "docker")
    try:
        factory = IMAGE_BACKENDS[name]
    except KeyError:
        available = ", ".join(sorted(IMAGE_BACKENDS))
        raise ConfigError(
            f"Unknown images backend: {name!r}. Available: {available}"
        ) from None
    return factory(section)


def build_inputs(config: dict[str, Any]) -> RawInputs:
    """Reads the openshift_* version variables from the profile's vars."""
    vars_ = _section(config, "vars")
    return RawInputs(**{field: vars_.get(var) for field, var in INPUT_VARS.items()})


def build_facts(config: dict[str, Any]) -> HostFacts:
    """Builds HostFacts from the profile's host, facts and vars sections.

    Raises:
        ConfigError: If the host has no name, a flag is not a boolean, or
            groups is malformed.
    """
    host = _section(config, "host")
    facts = _section(config, "facts")
    vars_ = _section(config, "vars")

    name = host.get("name")
    if not name:
        raise ConfigError("host.name is required")

    deployment_type = facts.get("deployment_type", ORIGIN)
    return HostFacts(
        name=str(name),
        is_containerized=as_flag(
            facts.get("is_containerized"), "facts.is_containerized", False
        ),
        is_atomic=as_flag(facts.get("is_atomic"), "facts.is_atomic", False),
        installed_version=coerce_version(facts.get("version")),
        deployment_type=deployment_type,
        service_type=facts.get("service_type", deployment_type),
        protect_installed_version=as_flag(
            vars_.get("openshift_protect_installed_version"),
            "vars.openshift_protect_installed_version",
            True,
        ),
        install_base_package=as_flag(
            vars_.get("version_install_base_package"),
            "vars.version_install_base_package",
            False,
        ),
        groups=as_groups(host.get("groups")),
        cli_image=facts.get("cli_image"),
    )


def build_context(
    config: dict[str, Any],
    package_query: PackageQuery | None = None,
    image_query: ImageQuery | None = None,
) -> ResolutionContext:
    """Builds a ResolutionContext from a merged host configuration.

    Args:
        config: Merged configuration from load_effective_config.
        package_query: Overrides the repository backend named in the profile.
        image_query: Overrides the images backend named in the profile.

    Returns:
        The context the engine resolves.

    Raises:
        ConfigError: On missing host name, malformed sections or unknown
            backend names.
    """
    return ResolutionContext(
        inputs=build_inputs(config),
        facts=build_facts(config),
        package_query=package_query or build_package_query(config),
        image_query=image_query or build_image_query(config),
    )


def resolve_host(
    profile_path: Path,
    package_query: PackageQuery | None = None,
    image_query: ImageQuery | None = None,
) -> ResolveResult:
    """Loads a host profile and resolves its version triple.

    Args:
        profile_path: Path to the host profile YAML file.
        package_query: Overrides the repository backend named in the profile.
        image_query: Overrides the images backend named in the profile.

    Returns:
        The resolved values for the host.

    Raises:
        ConfigError: On profile loading or structure problems.
        QueryError: If a package or image lookup fails.
        ResolutionError: On any fatal resolution outcome.
    """
    logger = get_global_logger()

    logger.step(1, 3, "Loading host profile...")
    config = load_effective_config(profile_path)

    logger.step(2, 3, "Building resolution context...")
    ctx = build_context(config, package_query, image_query)
    logger.verbose(
        "RESOLVE",
        f"Host {ctx.facts.name}: deployment_type={ctx.facts.deployment_type} "
        f"containerized={ctx.facts.is_containerized} atomic={ctx.facts.is_atomic}",
    )

    logger.step(3, 3, "Resolving version...")
    result = resolve(ctx)
    logger.verbose("RESOLVE", f"Resolved {result.host}: {result.as_vars()}")
    return result


@dataclass(frozen=True)
class HostOutcome:
    """Outcome of resolving one profile in a batch.

    Exactly one of result and error is set.
    """

    profile_path: Path
    result: ResolveResult | None = None
    error: OCPVersionError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def resolve_hosts(
    profile_paths: Iterable[Path],
    package_query: PackageQuery | None = None,
    image_query: ImageQuery | None = None,
) -> list[HostOutcome]:
    """Resolves several hosts, isolating each host's failure.

    Hosts are processed sequentially in the given order. An OCPVersionError
    for one host is recorded in its outcome and the batch continues.
    """
    logger = get_global_logger()
    outcomes: list[HostOutcome] = []
    for path in profile_paths:
        try:
            result = resolve_host(path, package_query, image_query)
        except OCPVersionError as err:
            logger.verbose("RESOLVE", f"{path}: {type(err).__name__}: {err}")
            outcomes.append(HostOutcome(profile_path=path, error=err))
        else:
            outcomes.append(HostOutcome(profile_path=path, result=result))
    return outcomes
