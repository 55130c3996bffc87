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

"""External lookups consumed by the resolution engine.

Available Backends:
    Package repository (PackageQuery):
        repoquery : RepoqueryBackend
        static : StaticPackageQuery
    Container images (ImageQuery):
        docker : DockerCliBackend
        static : StaticImageQuery

Example:
    ```python
    from ocpversion.query import StaticPackageQuery

    result = StaticPackageQuery({"origin": ["3.6.1"]}).query("origin")
    print(result.latest_version)  # 3.6.1
    ```
"""

from .images import DockerCliBackend, ImageQuery, StaticImageQuery
from .packages import PackageQuery, RepoqueryBackend, StaticPackageQuery

__all__ = [
    "ImageQuery",
    "PackageQuery",
    "DockerCliBackend",
    "RepoqueryBackend",
    "StaticImageQuery",
    "StaticPackageQuery",
]
