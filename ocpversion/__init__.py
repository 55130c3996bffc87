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

"""ocpversion: OpenShift version resolution.

Decides, for every host of an OpenShift 3.x cluster install, the three
coupled version values the rest of an install consumes:

  - openshift_version (e.g., "3.6.1")
  - openshift_image_tag (e.g., "v3.6.1")
  - openshift_pkg_version (e.g., "-3.6.1")

The values come from whatever the operator supplied (release, image tag,
explicit version, package version), what is already installed on the
host, and what the package repository or container images offer. Any
conflict or gap aborts the host with a precise error.

Quick Start
-----------
Validate a host profile:

    $ ocpversion validate inventory/hosts/master1.yaml

Resolve hosts:

    $ ocpversion resolve inventory/hosts/*.yaml

For full CLI documentation:

    $ ocpversion --help

Package Structure
-----------------
cli : module
    Command-line interface with argparse.
core : module
    Host profile to context, per-host orchestration.
config : package
    Layered YAML host profile loading and merging.
versioning : package
    Normalization, image tag grammar, version ordering.
discovery : package
    Strategy pattern for rpm and containerized version discovery.
query : package
    Package repository and container image lookups.
resolution : package
    The resolution engine and its stages.

Public API
----------
The primary interface is the CLI, but key functions are exported for
programmatic use:

    from ocpversion.core import resolve_host, resolve_hosts
    from ocpversion.validation import validate_host_profile
    from ocpversion.config import load_effective_config
    from ocpversion.resolution import resolve

For more details, see the individual module docstrings.

Project Information
-------------------
Author: Roger Cibrian
License: Apache-2.0
"""

__version__ = "0.1.0"
__author__ = "Roger Cibrian"
__license__ = "Apache-2.0"
__description__ = "OpenShift version, image tag and package version resolution"

# Re-export commonly used functions for convenience
from ocpversion.config import load_effective_config
from ocpversion.core import resolve_host, resolve_hosts
from ocpversion.resolution import resolve
from ocpversion.results import ResolveResult, ValidationResult
from ocpversion.validation import validate_host_profile

__all__ = [
    "__version__",
    "__author__",
    "__license__",
    "__description__",
    "resolve",
    "resolve_host",
    "resolve_hosts",
    "validate_host_profile",
    "load_effective_config",
    "ResolveResult",
    "ValidationResult",
]
