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

"""Version strategy protocol and registry for ocpversion.

A version strategy is the installation-mechanism-specific part of
resolution: it knows how a native package install or a containerized
install turns the user's hints into a canonical version.

- rpm: Native package install. Uses openshift_pkg_version or the newest
    version in the package repository.
- containerized: Image-based install. Uses openshift_image_tag,
    openshift_release, or the version baked into the CLI image.

Exactly one strategy runs per in-scope host, selected by
``HostFacts.is_containerized``.

Design Philosophy:
    - Strategies are Protocol classes (structural subtyping, not inheritance)
    - Registration happens at module import time (strategies self-register)
    - Registry is a simple dict (no complex dependency injection needed)
    - Each strategy is stateless and instantiated on demand

Example:
    Implementing a custom strategy:
        ```python
        from ocpversion.discovery.base import register_strategy

        class PinnedStrategy:
            def resolve_version(self, ctx, state):
                if state.version is None:
                    state.set_version("3.6.1", "pinned")

        register_strategy("pinned", PinnedStrategy)
        ```
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from ocpversion.exceptions import ConfigError

if TYPE_CHECKING:
    from ocpversion.models import HostFacts, ResolutionContext
    from ocpversion.resolution.state import ResolvedState

# -------------------------------
# Strategy Protocol
# -------------------------------


class VersionStrategy(Protocol):
    """Protocol for mechanism-specific version resolution.

    Implementations fill ``state.version`` (and, where the mechanism
    defines one, leave the other identifiers to the derivation guard).
    They must not assign a field that is already set.
    """

    def resolve_version(self, ctx: ResolutionContext, state: ResolvedState) -> None:
        """Resolve the canonical version for the host.

        Args:
            ctx: The host's resolution context (inputs, facts, collaborators).
            state: Working state; ``state.release``, ``state.image_tag`` and
                ``state.pkg_version`` hold the normalized user inputs.

        Raises:
            ResolutionError: When the mechanism cannot produce a version.
            QueryError: When a collaborator lookup fails.
        """
        ...


# -------------------------------
# Strategy Registry
# -------------------------------

_STRATEGY_REGISTRY: dict[str, type[VersionStrategy]] = {}


def register_strategy(name: str, strategy_class: type[VersionStrategy]) -> None:
    """Register a version strategy by name in the global registry.

    Registering the same name twice overwrites the previous registration
    (allows monkey-patching for tests).

    Args:
        name: Strategy name (e.g., "rpm").
        strategy_class: Class implementing the VersionStrategy protocol.
    """
    _STRATEGY_REGISTRY[name] = strategy_class


def get_strategy(name: str) -> VersionStrategy:
    """Get a new instance of a registered version strategy.

    Args:
        name: Strategy name. Case-sensitive.

    Returns:
        A new instance of the requested strategy.

    Raises:
        ConfigError: If the strategy name is not registered. The error
            message lists the available strategies.
    """
    if name not in _STRATEGY_REGISTRY:
        available = ", ".join(sorted(_STRATEGY_REGISTRY)) or "(none)"
        raise ConfigError(
            f"Unknown version strategy: {name!r}. Available: {available}"
        )
    return _STRATEGY_REGISTRY[name]()


def strategy_name_for(facts: HostFacts) -> str:
    """Name of the strategy that applies to a host."""
    return "containerized" if facts.is_containerized else "rpm"
