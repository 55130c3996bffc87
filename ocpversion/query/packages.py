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

"""Package repository queries.

The engine only consumes facts about the package repository; it never
installs anything. A query answers two questions for a package name: does
the repository know it, and which versions does it offer (newest first).

Backends:

- **repoquery**: Shells out to ``repoquery`` (yum-utils / dnf-plugins-core)
    on the machine running the resolution. Excluders are ignored so that
    versions hidden by an excluder package still count as available.
- **static**: Answers from a mapping, typically the ``repository.packages``
    section of a host profile. Useful for offline planning and tests.

Example:
    Query a static repository:
        ```python
        from ocpversion.query.packages import StaticPackageQuery

        repo = StaticPackageQuery({"origin": ["3.6.0", "3.6.1"]})
        result = repo.query("origin")
        result.package_found       # True
        result.available_versions  # ("3.6.1", "3.6.0")
        ```

Note:
    No retries or timeouts are applied here beyond what the backend
    command does itself; repository contents cannot change mid-run, so a
    failed query is reported as QueryError and aborts the host.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import shutil
import subprocess
from typing import Protocol

from ocpversion.exceptions import QueryError
from ocpversion.logging import get_global_logger
from ocpversion.models import PackageQueryResult
from ocpversion.versioning.keys import sort_newest_first


class PackageQuery(Protocol):
    """Protocol for package repository lookups."""

    def query(self, name: str) -> PackageQueryResult:
        """Look up a package by name.

        Args:
            name: Package name (the host's service type, e.g. "origin").

        Returns:
            Whether the package exists and its available versions,
                newest first.

        Raises:
            QueryError: If the lookup itself could not be performed.
        """
        ...


class RepoqueryBackend:
    """Package lookups through the ``repoquery`` command."""

    def __init__(self, executable: str = "repoquery") -> None:
        self.executable = executable

    def query(self, name: str) -> PackageQueryResult:
        logger = get_global_logger()
        repoquery = shutil.which(self.executable)
        if not repoquery:
            raise QueryError(
                f"{self.executable!r} is not available on this host. "
                "Install yum-utils (or dnf-plugins-core), or use the static "
                "repository backend."
            )

        cmd = [
            repoquery,
            "--quiet",
            "--show-duplicates",
            "--disableexcludes=all",
            "--queryformat",
            "%{version}",
            name,
        ]
        logger.debug("QUERY", f"Running: {' '.join(cmd)}")
        try:
            result = subprocess.run(
                cmd,
                check=True,
                capture_output=True,
                text=True,
            )
        except subprocess.CalledProcessError as err:
            raise QueryError(
                f"repoquery for {name!r} failed (exit {err.returncode}): "
                f"{(err.stderr or '').strip()}"
            ) from err

        versions = sort_newest_first(
            [line.strip() for line in result.stdout.splitlines()]
        )
        logger.verbose(
            "QUERY",
            f"repoquery {name}: {', '.join(versions) if versions else '(none)'}",
        )
        return PackageQueryResult(
            package_found=bool(versions), available_versions=tuple(versions)
        )


class StaticPackageQuery:
    """Package lookups answered from an in-memory mapping.

    A package mapped to an empty list is "found" but offers no versions,
    which resolves to the "0.0" sentinel downstream.
    """

    def __init__(self, packages: Mapping[str, Iterable[object]]) -> None:
        self._packages = {
            str(name): sort_newest_first([str(v) for v in versions or []])
            for name, versions in packages.items()
        }

    def query(self, name: str) -> PackageQueryResult:
        if name not in self._packages:
            return PackageQueryResult(package_found=False)
        return PackageQueryResult(
            package_found=True, available_versions=tuple(self._packages[name])
        )
