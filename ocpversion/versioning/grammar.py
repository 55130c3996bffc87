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

"""Image tag grammars per deployment type.

An image tag supplied in the inventory is only trusted as a version source
after it matches the grammar of the host's deployment type.

Grammars:

- **origin**: optional leading "v", exactly three integers separated by dots,
    optional trailing data that starts with a dash and may contain letters,
    digits, dashes and dots (v1.2.3, v3.5.1-alpha.1).
- **openshift-enterprise** (alias "enterprise"): mandatory leading "v", at
    least two integers separated by dots, optional dash-prefixed numeric
    suffix with its own dotted components (v3.4, v3.5.1.3, v1.2.3-4.5).

The literal tag "latest" is never checked. Deployment types without a
grammar are not checked either.

Example:
    Validate a tag before resolution:
        ```python
        from ocpversion.versioning.grammar import validate_image_tag

        validate_image_tag("v3.6.1-4.5", "openshift-enterprise")  # ok
        validate_image_tag("3.6.1", "openshift-enterprise")  # FormatError
        ```
"""

from __future__ import annotations

from dataclasses import dataclass
import re

from ocpversion.exceptions import FormatError
from ocpversion.logging import get_global_logger

__all__ = [
    "TagGrammar",
    "TAG_GRAMMARS",
    "grammar_for",
    "is_valid_image_tag",
    "validate_image_tag",
]


@dataclass(frozen=True)
class TagGrammar:
    """A compiled image tag pattern and how to describe it to a user.

    Attributes:
        pattern: Full-match regular expression.
        expected: Format description with examples, used in error messages.
    """

    pattern: re.Pattern[str]
    expected: str

    def matches(self, tag: str) -> bool:
        return self.pattern.match(tag) is not None


_ORIGIN = TagGrammar(
    pattern=re.compile(r"^v?\d+\.\d+\.\d+(-[\w\-.]*)?$"),
    expected="v#.#.#[-optional.#]. Examples: v1.2.3, v3.5.1-alpha.1",
)

_ENTERPRISE = TagGrammar(
    pattern=re.compile(r"^v\d+\.\d+(\.\d+)*(-\d+(\.\d+)*)?$"),
    expected=(
        "v#.#[.#[.#]]. Examples: v1.2, v3.4.1, v3.5.1.3, "
        "v3.5.1.3.4, v1.2-1, v1.2.3-4, v1.2.3-4.5, v1.2.3-4.5.6"
    ),
)

TAG_GRAMMARS: dict[str, TagGrammar] = {
    "origin": _ORIGIN,
    "openshift-enterprise": _ENTERPRISE,
    "enterprise": _ENTERPRISE,
}


def grammar_for(deployment_type: str) -> TagGrammar | None:
    """Return the grammar for a deployment type, or None if it has none."""
    return TAG_GRAMMARS.get(deployment_type)


def is_valid_image_tag(tag: str, deployment_type: str) -> bool:
    """Check a tag without raising. "latest" and unknown types pass."""
    if tag == "latest":
        return True
    grammar = grammar_for(deployment_type)
    return grammar is None or grammar.matches(tag)


def validate_image_tag(
    tag: str | None, deployment_type: str, *, host: str | None = None
) -> None:
    """Reject an image tag that does not match its deployment-type grammar.

    Args:
        tag: Image tag from the inventory, or None when not supplied.
        deployment_type: Deployment type selecting the grammar.
        host: Host name recorded on the raised error.

    Raises:
        FormatError: If the tag is set, is not "latest", and does not match.
    """
    logger = get_global_logger()
    if tag is None or tag == "latest":
        return

    grammar = grammar_for(deployment_type)
    if grammar is None:
        logger.debug(
            "FORMAT",
            f"No image tag grammar for deployment type {deployment_type!r}; "
            f"accepting {tag!r} unchecked",
        )
        return

    if not grammar.matches(tag):
        raise FormatError(tag, grammar.expected, deployment_type, host=host)
    logger.debug("FORMAT", f"Image tag {tag!r} is valid for {deployment_type}")
