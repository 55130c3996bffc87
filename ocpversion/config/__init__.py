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

"""Configuration loading for ocpversion.

Host profiles are YAML files layered on top of inventory-wide and
per-group defaults:

  - Inventory defaults (defaults/all.yaml)
  - Group defaults (defaults/groups/<group>.yaml)
  - Host profile (hosts/<host>.yaml)

The loader performs deep merging where dicts are merged recursively and
lists/scalars are replaced (last wins).

Example:
    Basic usage:
        ```python
        from pathlib import Path
        from ocpversion.config import load_effective_config

        config = load_effective_config(Path("inventory/hosts/node1.yaml"))
        print(config["vars"]["openshift_release"])  # "3.6"
        ```
"""

from .loader import load_effective_config, load_yaml_text

__all__ = ["load_effective_config", "load_yaml_text"]
