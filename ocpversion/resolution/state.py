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

"""Working record built up while one host is being resolved."""

from __future__ import annotations

from dataclasses import dataclass, field

from ocpversion.exceptions import StateOverwriteError

# Fields that may only ever go from None to a value once
WRITE_ONCE_FIELDS = frozenset({"version", "image_tag", "pkg_version", "release"})


@dataclass
class ResolvedState:
    """Mutable, append-only resolution state for a single host.

    The four identifier fields start unset and can be assigned exactly
    once. Assigning an already-set field raises StateOverwriteError instead
    of silently replacing the earlier decision.

    Attributes:
        host: Host name, recorded on any raised error.
        version: Canonical version.
        image_tag: Image tag ("v"-prefixed).
        pkg_version: Package version ("-"-prefixed).
        release: Normalized release prefix.
        version_source: Which rule produced the version ("requested",
            "installed", "rpm", "pkg_version", "image_tag", "release",
            "image_lookup").
        rpm_version: Version the repository offers for a containerized host.
        warnings: Non-fatal findings to surface with the result.
    """

    host: str
    version: str | None = None
    image_tag: str | None = None
    pkg_version: str | None = None
    release: str | None = None
    version_source: str | None = None
    rpm_version: str | None = None
    warnings: list[str] = field(default_factory=list)

    def __setattr__(self, name: str, value: object) -> None:
        if name in WRITE_ONCE_FIELDS:
            current = getattr(self, name, None)
            if current is not None:
                raise StateOverwriteError(
                    name, current, str(value), host=getattr(self, "host", None)
                )
        super().__setattr__(name, value)

    def set_version(self, version: str, source: str) -> None:
        """Assign the canonical version and remember which rule chose it."""
        self.version = version
        self.version_source = source
