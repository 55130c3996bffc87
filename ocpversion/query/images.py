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

"""Container image version lookups.

A containerized install without an explicit image tag needs to know which
version a given image tag actually contains (``latest`` or a two-component
release tag such as ``v3.6``). The CLI image answers that with its
``version`` subcommand, whose first line looks like::

    openshift v3.6.1+c4dd4cf-12

Backends:

- **docker**: Runs ``docker run --rm <image>:<tag> version``.
- **static**: Answers from a tag -> reported-version mapping, typically the
    ``images.tags`` section of a host profile.

Both return the raw reported version token (``v3.6.1+c4dd4cf-12``); the
containerized strategy decides how much of it to keep.
"""

from __future__ import annotations

from collections.abc import Mapping
import shutil
import subprocess
from typing import Protocol

from ocpversion.exceptions import QueryError
from ocpversion.logging import get_global_logger


class ImageQuery(Protocol):
    """Protocol for image version lookups."""

    def lookup(self, image: str, tag: str) -> str:
        """Return the version reported by ``image:tag``.

        Args:
            image: Image repository (e.g., "openshift/origin").
            tag: Image tag (e.g., "latest", "v3.6").

        Returns:
            The reported version token, e.g. "v3.6.1+c4dd4cf".

        Raises:
            QueryError: If the image cannot be run or its output parsed.
        """
        ...


def parse_version_output(stdout: str) -> str:
    """Pull the version token out of ``openshift version`` output.

    Raises:
        QueryError: If the first line does not carry a version token.
    """
    lines = [line for line in stdout.splitlines() if line.strip()]
    if not lines:
        raise QueryError("image printed no version information")
    parts = lines[0].split()
    if len(parts) < 2:
        raise QueryError(f"unexpected version output: {lines[0]!r}")
    return parts[1]


class DockerCliBackend:
    """Image lookups through the docker CLI."""

    def __init__(self, executable: str = "docker") -> None:
        self.executable = executable

    def lookup(self, image: str, tag: str) -> str:
        logger = get_global_logger()
        docker = shutil.which(self.executable)
        if not docker:
            raise QueryError(
                f"{self.executable!r} is not available on this host; cannot "
                f"inspect {image}:{tag}. Set openshift_image_tag or use the "
                "static image backend."
            )

        cmd = [docker, "run", "--rm", f"{image}:{tag}", "version"]
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
                f"Failed to run {image}:{tag} (exit {err.returncode}): "
                f"{(err.stderr or '').strip()}"
            ) from err

        reported = parse_version_output(result.stdout)
        logger.verbose("QUERY", f"{image}:{tag} reports {reported}")
        return reported


class StaticImageQuery:
    """Image lookups answered from a tag -> reported version mapping."""

    def __init__(self, tags: Mapping[str, object]) -> None:
        self._tags = {str(tag): str(version) for tag, version in tags.items()}

    def lookup(self, image: str, tag: str) -> str:
        if tag not in self._tags:
            known = ", ".join(sorted(self._tags)) or "(none)"
            raise QueryError(
                f"No version recorded for {image}:{tag}. Known tags: {known}"
            )
        return self._tags[tag]
