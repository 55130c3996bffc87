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

"""Host profile loading and merging for ocpversion.

This module implements a three-layer configuration system so that
inventory-wide settings can be refined per group and finally per host.

Configuration Layers:
    1. **Inventory defaults** (defaults/all.yaml)
       - Settings shared by every host (deployment type, release, backends)
       - Found by walking upward from the host profile

    2. **Group defaults** (defaults/groups/<group>.yaml)
       - One file per inventory group the host lists under host.groups
       - Applied in the order the groups are listed
       - Optional; missing group files are skipped

    3. **Host profile** (hosts/<host>.yaml)
       - Host name, groups, facts, and host-specific vars
       - Always required; overrides group and inventory defaults

Merge Behavior:
    The loader performs deep merging with "last wins" semantics:

    - **Dicts**: Recursively merged (keys from overlay override base)
    - **Lists**: Completely replaced (NOT appended/extended)
    - **Scalars**: Overwritten (strings, numbers, booleans)

Version Scalars:
    Profiles are parsed without YAML's implicit float resolution, so an
    unquoted ``openshift_release: 3.10`` is read as the string "3.10" and
    not the float 3.1. Integers and booleans are resolved as usual.

Error Handling:
    - ConfigError: Profile file doesn't exist, YAML parse errors, empty
        files, or a top-level document that is not a mapping
    - All errors are chained with "from err" for better debugging

Example:
    Basic usage:
        ```python
        from pathlib import Path
        from ocpversion.config import load_effective_config

        config = load_effective_config(Path("inventory/hosts/master1.yaml"))
        print(config["host"]["name"])  # "master1.example.com"
        ```
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from ocpversion.exceptions import ConfigError
from ocpversion.logging import get_global_logger

# -------------------------------
# YAML helpers
# -------------------------------

_FLOAT_TAG = "tag:yaml.org,2002:float"


class _VersionSafeLoader(yaml.SafeLoader):
    """SafeLoader that leaves float-looking scalars as strings."""


_VersionSafeLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _FLOAT_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def load_yaml_text(text: str) -> Any:
    """Parse YAML text with version-preserving scalar resolution."""
    return yaml.load(text, Loader=_VersionSafeLoader)


def _load_yaml_file(p: Path) -> Any:
    """Loads a YAML file and returns the parsed Python object.

    Args:
        p: Path to the YAML file to load.

    Returns:
        The parsed Python object from the YAML file.

    Raises:
        ConfigError: When the file does not exist, fails to parse, or is empty.
    """
    if not p.exists():
        raise ConfigError(f"file not found: {p}")
    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.load(f, Loader=_VersionSafeLoader)
    except yaml.YAMLError as err:
        raise ConfigError(f"Error parsing YAML: {p}: {err}") from err
    if data is None:
        raise ConfigError(f"YAML file is empty: {p}")
    return data


# -------------------------------
# Merge logic
# -------------------------------


def _deep_merge_dicts(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """Deep-merges two dicts with "overlay wins" semantics.

    This function does not mutate inputs; returns a new dict.
    """
    result: dict[str, Any] = dict(base)
    for k, v in overlay.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = _deep_merge_dicts(result[k], v)
        else:
            # Replace lists and scalars entirely
            result[k] = v
    return result


# -------------------------------
# Defaults discovery
# -------------------------------


def _find_defaults_root(start_dir: Path) -> Path | None:
    """Walks upward from start_dir looking for a defaults/all.yaml file.

    Returns:
        The defaults/ directory if found, None otherwise.
    """
    for parent in [start_dir] + list(start_dir.parents):
        candidate = parent / "defaults" / "all.yaml"
        if candidate.exists():
            return parent / "defaults"
    return None


def _host_groups(profile: dict[str, Any]) -> list[str]:
    """Group names listed under host.groups (non-strings are ignored)."""
    host = profile.get("host")
    if not isinstance(host, dict):
        return []
    groups = host.get("groups") or []
    if isinstance(groups, str):
        return [groups]
    if not isinstance(groups, list):
        return []
    return [g for g in groups if isinstance(g, str) and g]


def _print_yaml_content(data: dict[str, Any], indent: int = 0) -> None:
    """Print YAML content in a readable format for debug mode."""
    logger = get_global_logger()
    yaml_str = yaml.dump(data, default_flow_style=False, sort_keys=False)
    for line in yaml_str.split("\n"):
        if line.strip():
            logger.debug("CONFIG", " " * indent + line)


# -------------------------------
# Public API
# -------------------------------


def load_effective_config(profile_path: Path) -> dict[str, Any]:
    """Loads and merges the effective configuration for a host profile.

    Performs the following operations:

    1. Read host profile YAML
    2. Find defaults root by scanning upwards for defaults/all.yaml
    3. Load inventory defaults
    4. Load group defaults for each group listed in host.groups
    5. Merge: all -> groups -> host (dicts deep-merge, lists replace)

    Args:
        profile_path: Path to the host profile YAML file.

    Returns:
        A merged configuration dict. If no defaults were found in the tree,
            the host profile is returned as-is.

    Raises:
        ConfigError: On YAML parse errors, empty files, invalid structure, or
            if the profile file is missing.
    """
    logger = get_global_logger()
    profile_path = profile_path.resolve()

    logger.verbose("CONFIG", f"Loading host profile: {profile_path}")

    profile = _load_yaml_file(profile_path)
    if not isinstance(profile, dict):
        raise ConfigError(f"top-level YAML must be a mapping (dict): {profile_path}")

    defaults_root = _find_defaults_root(profile_path.parent)
    merged: dict[str, Any] = {}
    layers_merged = 0

    if defaults_root:
        logger.verbose("CONFIG", f"Found defaults root: {defaults_root}")
        all_path = defaults_root / "all.yaml"
        inventory_defaults = _load_yaml_file(all_path)
        if isinstance(inventory_defaults, dict):
            logger.debug("CONFIG", "--- Content from all.yaml ---")
            _print_yaml_content(inventory_defaults)
            merged = _deep_merge_dicts(merged, inventory_defaults)
            layers_merged += 1

        for group in _host_groups(profile):
            candidate = defaults_root / "groups" / f"{group}.yaml"
            if not candidate.exists():
                logger.debug("CONFIG", f"No group defaults for {group}")
                continue
            logger.verbose(
                "CONFIG", f"Loading: {candidate.relative_to(defaults_root.parent)}"
            )
            group_defaults = _load_yaml_file(candidate)
            if isinstance(group_defaults, dict):
                logger.debug("CONFIG", f"--- Content from {group}.yaml ---")
                _print_yaml_content(group_defaults)
                merged = _deep_merge_dicts(merged, group_defaults)
                layers_merged += 1

    logger.debug("CONFIG", f"--- Content from {profile_path.name} ---")
    _print_yaml_content(profile)
    merged = _deep_merge_dicts(merged, profile)
    layers_merged += 1

    logger.verbose("CONFIG", f"Deep merging {layers_merged} layer(s)")
    logger.debug("CONFIG", "--- Final Merged Configuration ---")
    _print_yaml_content(merged)

    return merged
