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

"""Mechanism-specific version strategies.

Available Strategies:
    rpm : RpmVersionStrategy
        Native package installs. Version from openshift_pkg_version or the
        newest package in the repository.
    containerized : ContainerizedVersionStrategy
        Image-based installs. Version from openshift_image_tag,
        openshift_release, or the CLI image itself.

Example:
    ```python
    from ocpversion.discovery import get_strategy, strategy_name_for

    strategy = get_strategy(strategy_name_for(ctx.facts))
    strategy.resolve_version(ctx, state)
    ```
"""

# Import strategy modules to trigger self-registration
from . import (
    containerized,  # noqa: F401
    rpm,  # noqa: F401
)
from .base import VersionStrategy, get_strategy, register_strategy, strategy_name_for

__all__ = ["VersionStrategy", "get_strategy", "register_strategy", "strategy_name_for"]
