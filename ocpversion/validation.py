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

"""Host profile validation module.

This module provides validation functions for checking host profile syntax
and configuration without querying a package repository or running any
container image. This is useful for quick feedback while editing an
inventory and in CI/CD pipelines.

Validation Checks:

- YAML syntax is valid and all layers merge
- apiVersion is present and supported
- host.name is present, host.groups is a list of names
- Fact flags are booleans, deployment type is known
- Version variables are scalars
- openshift_image_tag matches the deployment type's tag grammar
- Repository and images backends exist and are configured

Example:
    Validate a host profile and handle results:
        ```python
        from pathlib import Path
        from ocpversion.validation import validate_host_profile

        result = validate_host_profile(Path("inventory/hosts/master1.yaml"))
        if result.status == "valid":
            print(f"Profile for {result.host} is valid")
        else:
            for error in result.errors:
                print(f"Error: {error}")
        ```

"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ocpversion.config import load_effective_config
from ocpversion.core import (
    IMAGE_BACKENDS,
    INPUT_VARS,
    PACKAGE_BACKENDS,
    as_flag,
    as_groups,
)
from ocpversion.exceptions import ConfigError
from ocpversion.logging import get_global_logger
from ocpversion.models import MASTER_NODE_GROUPS, ORIGIN
from ocpversion.results import ValidationResult
from ocpversion.versioning.grammar import TAG_GRAMMARS, grammar_for
from ocpversion.versioning.normalize import coerce_version, normalize_release

__all__ = ["validate_host_profile"]

SUPPORTED_API_VERSIONS = ("ocpversion/v1",)

_BOOL_FACTS = ("is_containerized", "is_atomic")
_BOOL_VARS = ("openshift_protect_installed_version", "version_install_base_package")


def _mapping(
    config: dict[str, Any], key: str, errors: list[str]
) -> dict[str, Any] | None:
    value = config.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        errors.append(f"'{key}' must be a mapping, got {type(value).__name__}")
        return None
    return value


def _check_flag(value: Any, field: str, errors: list[str]) -> None:
    try:
        as_flag(value, field, False)
    except ConfigError:
        errors.append(f"{field} must be true or false")


def _is_containerized(facts: dict[str, Any]) -> bool:
    try:
        return as_flag(facts.get("is_containerized"), "facts.is_containerized", False)
    except ConfigError:
        return False


def _check_host(host: dict[str, Any], errors: list[str], warnings: list[str]) -> None:
    name = host.get("name")
    if not name or not isinstance(name, str):
        errors.append("Missing required field: host.name")

    try:
        groups = as_groups(host.get("groups"))
    except ConfigError as err:
        errors.append(str(err))
        return
    if not any(group in MASTER_NODE_GROUPS for group in groups):
        warnings.append(
            "Host is not in a master or node group; only the requested and "
            "installed version rules will apply"
        )


def _check_facts(facts: dict[str, Any], errors: list[str], warnings: list[str]) -> None:
    for key in _BOOL_FACTS:
        _check_flag(facts.get(key), f"facts.{key}", errors)

    deployment_type = facts.get("deployment_type", ORIGIN)
    if deployment_type not in TAG_GRAMMARS:
        warnings.append(
            f"Unknown deployment_type {deployment_type!r}; "
            "openshift_image_tag will not be format-checked"
        )


def _check_vars(
    vars_: dict[str, Any],
    facts: dict[str, Any],
    errors: list[str],
    warnings: list[str],
) -> None:
    for var in INPUT_VARS.values():
        value = vars_.get(var)
        if value is not None and not isinstance(value, (str, int, float)):
            errors.append(f"vars.{var} must be a scalar, got {type(value).__name__}")

    for var in _BOOL_VARS:
        _check_flag(vars_.get(var), f"vars.{var}", errors)

    deployment_type = facts.get("deployment_type", ORIGIN)
    image_tag = vars_.get("openshift_image_tag")
    if isinstance(image_tag, (str, int, float)):
        tag = coerce_version(image_tag)
        grammar = grammar_for(deployment_type)
        if tag and tag != "latest" and grammar and not grammar.matches(tag):
            errors.append(
                f"openshift_image_tag {tag!r} does not match the format for "
                f"{deployment_type}: {grammar.expected}"
            )
        if tag and not _is_containerized(facts):
            warnings.append(
                "openshift_image_tag is only used for containerized installs"
            )

    if (
        _is_containerized(facts)
        and deployment_type == ORIGIN
        and normalize_release(vars_.get("openshift_release")) is None
        and coerce_version(image_tag) is None
    ):
        errors.append(
            "Containerized origin installs require openshift_release or "
            "openshift_image_tag"
        )


def _check_backend(
    config: dict[str, Any],
    key: str,
    available: dict[str, Any],
    default: str,
    data_key: str,
    errors: list[str],
) -> None:
    section = _mapping(config, key, errors)
    if section is None:
        return
    name = section.get("backend", default)
    if name not in available:
        errors.append(
            f"Unknown {key} backend: {name!r}. "
            f"Available: {', '.join(sorted(available))}"
        )
        return
    if name == "static":
        data = section.get(data_key)
        if data is not None and not isinstance(data, dict):
            errors.append(f"{key}.{data_key} must be a mapping")


def validate_host_profile(profile_path: Path) -> ValidationResult:
    """Validate a host profile without running any query.

    This function checks:

    1. All configuration layers can be loaded and merged
    2. apiVersion is supported
    3. host, facts and vars sections are well-formed
    4. openshift_image_tag has the right format
    5. Backends exist and are configured

    Does NOT:

    - Run repoquery or docker
    - Decide which version the host would get

    Args:
        profile_path: Path to the host profile YAML file to validate.

    Returns:
        The validation outcome. status is "valid" when errors is empty.

    Example:
        Validate a profile and check results:
            ```python
            from pathlib import Path

            result = validate_host_profile(Path("hosts/node1.yaml"))
            if result.status == "valid":
                print("Profile is valid!")
            ```

    """
    logger = get_global_logger()
    errors: list[str] = []
    warnings: list[str] = []
    host_name: str | None = None

    logger.verbose("VALIDATION", f"Validating host profile: {profile_path}")

    try:
        config = load_effective_config(profile_path)
    except ConfigError as err:
        errors.append(str(err))
        return ValidationResult(
            status="invalid",
            errors=errors,
            warnings=warnings,
            profile_path=str(profile_path),
        )

    api_version = config.get("apiVersion")
    if not api_version:
        errors.append("Missing required field: apiVersion")
    elif api_version not in SUPPORTED_API_VERSIONS:
        errors.append(
            f"Unsupported apiVersion: {api_version!r}. "
            f"Supported: {', '.join(SUPPORTED_API_VERSIONS)}"
        )

    host = _mapping(config, "host", errors)
    if host is not None:
        _check_host(host, errors, warnings)
        if isinstance(host.get("name"), str):
            host_name = host["name"]

    facts = _mapping(config, "facts", errors)
    if facts is not None:
        _check_facts(facts, errors, warnings)

    vars_ = _mapping(config, "vars", errors)
    if vars_ is not None and facts is not None:
        _check_vars(vars_, facts, errors, warnings)

    _check_backend(
        config, "repository", PACKAGE_BACKENDS, "repoquery", "packages", errors
    )
    _check_backend(config, "images", IMAGE_BACKENDS, "docker", "tags", errors)

    status = "invalid" if errors else "valid"
    logger.verbose(
        "VALIDATION",
        f"{status}: {len(errors)} error(s), {len(warnings)} warning(s)",
    )
    return ValidationResult(
        status=status,
        errors=errors,
        warnings=warnings,
        host=host_name,
        profile_path=str(profile_path),
    )
