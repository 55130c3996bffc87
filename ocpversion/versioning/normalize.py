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

"""Textual normalization of version inputs.

Nothing in this module validates anything; it only rewrites strings into
the forms the rest of the engine expects. Version-like values are always
kept as strings: a YAML or Python float would turn "3.10" into 3.1.

Example:
    Normalize inputs before resolution:
        ```python
        from ocpversion.models import RawInputs
        from ocpversion.versioning.normalize import normalize_inputs

        inputs = normalize_inputs(RawInputs(release="v3.6", version=3))
        inputs.release  # "3.6"
        inputs.version  # "3"
        ```

    Convert between identifier forms:
        ```python
        version_from_image_tag("v3.6.1-4.5")        # "3.6.1"
        version_from_pkg_version("-3.6.1-1.el7")    # "3.6.1"
        image_tag_to_pkg_version("v3.6.1", include_dash=True)  # "-3.6.1"
        ```
"""

from __future__ import annotations

from dataclasses import replace

from ocpversion.models import RawInputs, RawValue

__all__ = [
    "strip_leading_v",
    "coerce_version",
    "normalize_release",
    "normalize_inputs",
    "version_from_image_tag",
    "version_from_pkg_version",
    "chomp_commit_offset",
    "image_tag_to_pkg_version",
]


def strip_leading_v(value: str) -> str:
    """Remove exactly one leading "v" ("vv3.6" -> "v3.6")."""
    return value[1:] if value.startswith("v") else value


def coerce_version(value: RawValue) -> str | None:
    """Coerce a version-like input to str; None and blank strings become None."""
    if value is None:
        return None
    text = str(value)
    if not text.strip():
        return None
    return text


def normalize_release(value: RawValue) -> str | None:
    """Coerce openshift_release to str and strip one leading "v".

    A release that is empty once the "v" is gone ("v") is unset.
    """
    text = coerce_version(value)
    if text is None:
        return None
    return coerce_version(strip_leading_v(text))


def normalize_inputs(inputs: RawInputs) -> RawInputs:
    """Return a copy of inputs with every field in canonical string form.

    Only the release loses its leading "v"; image tags keep theirs and
    package versions keep their leading "-".
    """
    return replace(
        inputs,
        release=normalize_release(inputs.release),
        image_tag=coerce_version(inputs.image_tag),
        version=coerce_version(inputs.version),
        pkg_version=coerce_version(inputs.pkg_version),
        upgrade_target=coerce_version(inputs.upgrade_target),
    )


def version_from_image_tag(tag: str) -> str:
    """Derive a version from an image tag by dropping the "v" and any suffix."""
    return strip_leading_v(tag).split("-")[0]


def version_from_pkg_version(pkg_version: str) -> str:
    """Derive a version from a package version ("-3.6.1-1.el7" -> "3.6.1")."""
    text = pkg_version[1:] if pkg_version.startswith("-") else pkg_version
    return text.split("-")[0]


def chomp_commit_offset(version: str) -> str:
    """Drop a "+commit" build offset ("3.6.1+abc123-2" -> "3.6.1")."""
    return version.split("+", 1)[0]


def image_tag_to_pkg_version(version: str, include_dash: bool = False) -> str:
    """Convert an image tag to a package version if necessary.

    Empty strings and strings already in package-version form pass through.
    A "v"-prefixed tag loses the "v" and any "-release" suffix.

    Args:
        version: Image tag or package version.
        include_dash: Prefix the result with "-" (as appended to a package
            name) unless it is empty or already dashed.

    Returns:
        The package version string.
    """
    if version.startswith("v"):
        version = version[1:].split("-")[0]
    if include_dash and version and not version.startswith("-"):
        version = "-" + version
    return version
