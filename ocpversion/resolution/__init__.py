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

"""Version resolution engine.

Modules:
    engine
        resolve(): runs all stages for one host.
    rules
        Ordered guard/action rules that choose the canonical version.
    consistency
        RPM/image agreement check for containerized hosts.
    guard
        Derivation of image tag and package version, terminal checks.
    state
        Write-once working state.
"""

from .engine import resolve
from .state import ResolvedState

__all__ = ["resolve", "ResolvedState"]
