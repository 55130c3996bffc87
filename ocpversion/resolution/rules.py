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

"""Version source rules.

The canonical version is decided by an ordered list of guard/action pairs.
Each rule's guard is evaluated in turn against the context and the state
built so far; when it holds, the action runs. Rules that set the version
only fire while the version is still unset, so the first of them to match
wins and later ones become no-ops.

Rules, in order:

1. requested: an explicit openshift_version is used as-is.
2. protect_installed: an already-installed version is kept when
    openshift_protect_installed_version is true.
3. abort_ambiguous: a containerized Origin host with neither a release nor
    an image tag is refused (Origin's ``latest`` is usually an alpha build).
    This guard does not depend on the version, so it fires even when an
    earlier rule already chose one.
4. mechanism: masters and nodes run the rpm or containerized strategy.
5. cross_discovery: containerized, non-Atomic masters and nodes also look up
    what the package repository offers, for the consistency check.

Every rule is importable on its own so each branch can be tested in
isolation.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from ocpversion.discovery import get_strategy, strategy_name_for
from ocpversion.exceptions import AmbiguousVersionError, PackageNotFoundError
from ocpversion.logging import get_global_logger
from ocpversion.models import ORIGIN, ResolutionContext

from .state import ResolvedState

Guard = Callable[[ResolutionContext, ResolvedState], bool]
Action = Callable[[ResolutionContext, ResolvedState], None]


@dataclass(frozen=True)
class Rule:
    """A named guard/action pair.

    Attributes:
        name: Rule name used in log output.
        applies: Guard deciding whether the action runs.
        action: Mutates the state (or raises).
    """

    name: str
    applies: Guard
    action: Action


# -------------------------------
# requested
# -------------------------------


def _requested_applies(ctx: ResolutionContext, state: ResolvedState) -> bool:
    return ctx.inputs.version is not None and state.version is None


def _use_requested(ctx: ResolutionContext, state: ResolvedState) -> None:
    state.set_version(str(ctx.inputs.version), "requested")


# -------------------------------
# protect_installed
# -------------------------------


def _protect_applies(ctx: ResolutionContext, state: ResolvedState) -> bool:
    return (
        bool(ctx.facts.installed_version)
        and state.version is None
        and ctx.facts.protect_installed_version
    )


def _use_installed(ctx: ResolutionContext, state: ResolvedState) -> None:
    state.set_version(str(ctx.facts.installed_version), "installed")


# -------------------------------
# abort_ambiguous
# -------------------------------


def _ambiguous_applies(ctx: ResolutionContext, state: ResolvedState) -> bool:
    return (
        ctx.facts.is_containerized
        and ctx.facts.deployment_type == ORIGIN
        and state.release is None
        and state.image_tag is None
    )


def _abort_ambiguous(ctx: ResolutionContext, state: ResolvedState) -> None:
    raise AmbiguousVersionError(
        "To install a containerized Origin release, you must set "
        "openshift_release or\nopenshift_image_tag in your inventory to "
        "specify which version of the OpenShift\ncomponent images to use. "
        "You may want the latest (usually alpha) releases or\na more stable "
        'release. (Suggestion: add openshift_release="x.y" to inventory.)',
        host=ctx.facts.name,
    )


# -------------------------------
# mechanism
# -------------------------------


def _mechanism_applies(ctx: ResolutionContext, state: ResolvedState) -> bool:
    return ctx.facts.in_scope


def _run_mechanism(ctx: ResolutionContext, state: ResolvedState) -> None:
    strategy = get_strategy(strategy_name_for(ctx.facts))
    strategy.resolve_version(ctx, state)


# -------------------------------
# cross_discovery
# -------------------------------


def _cross_discovery_applies(ctx: ResolutionContext, state: ResolvedState) -> bool:
    return (
        ctx.facts.in_scope and ctx.facts.is_containerized and not ctx.facts.is_atomic
    )


def _discover_rpm_version(ctx: ResolutionContext, state: ResolvedState) -> None:
    logger = get_global_logger()
    package = ctx.facts.service_type
    result = ctx.package_query.query(package)
    if not result.package_found:
        raise PackageNotFoundError(package, host=ctx.facts.name)
    state.rpm_version = result.latest_version
    logger.verbose("RESOLVE", f"Repository offers {package} {state.rpm_version}")


SOURCE_RULES: tuple[Rule, ...] = (
    Rule("requested", _requested_applies, _use_requested),
    Rule("protect_installed", _protect_applies, _use_installed),
    Rule("abort_ambiguous", _ambiguous_applies, _abort_ambiguous),
    Rule("mechanism", _mechanism_applies, _run_mechanism),
    Rule("cross_discovery", _cross_discovery_applies, _discover_rpm_version),
)


def run_source_rules(
    ctx: ResolutionContext,
    state: ResolvedState,
    rules: Sequence[Rule] = SOURCE_RULES,
) -> None:
    """Evaluate the rules in order against the state.

    Args:
        ctx: Resolution context with normalized inputs.
        state: Working state, seeded with the normalized inputs.
        rules: Rules to evaluate. Defaults to SOURCE_RULES.

    Raises:
        ResolutionError: Raised by the first rule that cannot proceed.
        QueryError: When a collaborator lookup fails.
    """
    logger = get_global_logger()
    for rule in rules:
        if not rule.applies(ctx, state):
            logger.debug("RESOLVE", f"Rule {rule.name}: skipped")
            continue
        logger.debug("RESOLVE", f"Rule {rule.name}: applies")
        rule.action(ctx, state)

    if state.version is not None:
        logger.verbose(
            "RESOLVE", f"Version {state.version} (source: {state.version_source})"
        )
