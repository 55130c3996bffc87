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

"""Version string handling for ocpversion.

Modules:
    normalize
        Textual normalization ("v3.6" -> "3.6") and conversions between
        version, image tag, and package version forms.
    grammar
        Deployment-type-specific image tag grammars.
    keys
        Ordering of repository/image versions (newest first, minimum checks).

These are intentionally narrow: the grammars describe OpenShift image tags,
not semantic versioning in general.

Example:
    ```python
    from ocpversion.versioning import normalize_release, validate_image_tag

    normalize_release("v3.10")  # "3.10"
    validate_image_tag("v3.10.0", "origin")
    ```
"""

from .grammar import TAG_GRAMMARS, is_valid_image_tag, validate_image_tag
from .keys import compare_any, is_older_than, sort_newest_first, version_key_any
from .normalize import (
    chomp_commit_offset,
    coerce_version,
    image_tag_to_pkg_version,
    normalize_inputs,
    normalize_release,
    strip_leading_v,
    version_from_image_tag,
    version_from_pkg_version,
)

__all__ = [
    "TAG_GRAMMARS",
    "is_valid_image_tag",
    "validate_image_tag",
    "compare_any",
    "is_older_than",
    "sort_newest_first",
    "version_key_any",
    "chomp_commit_offset",
    "coerce_version",
    "image_tag_to_pkg_version",
    "normalize_inputs",
    "normalize_release",
    "strip_leading_v",
    "version_from_image_tag",
    "version_from_pkg_version",
]
