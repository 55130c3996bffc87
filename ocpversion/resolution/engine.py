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

"""Resolution engine: one host in, one consistent version triple out.

Stages, strictly in order:

1. Normalize inputs (strings only, release without leading "v").
2. Validate the image tag against the deployment type's grammar.
3. Run the version source rules (requested, installed, ambiguity guard,
    rpm/containerized strategy, repository cross-discovery).
4. Check RPM/image agreement on containerized, non-Atomic hosts.
5. Derive image tag and package version, then assert completeness.

Hosts outside the master/node groups stop after stage 3 with whatever the
host-independent rules decided.

Any failure raises a ResolutionError (or QueryError) and nothing is
returned for that host; there is no partial result.

Example:
    ```python
    from ocpversion.models import HostFacts, RawInputs, ResolutionContext
    from ocpversion.query import StaticImageQuery, StaticPackageQuery
    from ocpversion.resolution import resolve

    ctx = ResolutionContext(
        inputs=RawInputs(),
        facts=HostFacts(
            name="node1",
            service_type="origin",
            groups=("oo_nodes_to_config",),
        ),
        package_query=StaticPackageQuery({"origin": ["3.6.1", "3.6.0"]}),
        image_query=StaticImageQuery({}),
    )
    result = resolve(ctx)
    result.version      # "3.6.1"
    result.image_tag    # "v3.6.1"
    result.pkg_version  # "-3.6.1"
    ```
"""

from __future__ import annotations

from dataclasses import replace

from ocpversion.logging import get_global_logger
from ocpversion.models import ResolutionContext
from ocpversion.results import ResolveResult
from ocpversion.versioning.grammar import validate_image_tag
from ocpversion.versioning.normalize import image_tag_to_pkg_version, normalize_inputs

from .consistency import check_consistency
from .guard import assert_complete, derive_dependents
from .rules import run_source_rules
from .state import ResolvedState

_IMAGE_TAG_IGNORED = (
    "openshift_image_tag is used for containerized installs. If you are trying "
    "to specify an image for a non-container install see oreg_url or "
    "oreg_url_master or oreg_url_node."
)


def resolve(ctx: ResolutionContext) -> ResolveResult:
    """Resolve the version triple for one host.

    Args:
        ctx: The host's inputs, facts and collaborators.

    Returns:
        The resolved values. For in-scope hosts version and image_tag are
            always set, and pkg_version is set unless an upgrade target is.

    Raises:
        ResolutionError: Any fatal resolution outcome (see
            ocpversion.exceptions).
        QueryError: A package or image lookup could not be performed.
    """
    logger = get_global_logger()
    facts = ctx.facts
    logger.verbose("RESOLVE", f"Resolving host {facts.name}")

    inputs = normalize_inputs(ctx.inputs)
    ctx = replace(ctx, inputs=inputs)
    logger.debug("NORMALIZE", f"Normalized inputs: {inputs}")

    validate_image_tag(inputs.image_tag, facts.deployment_type, host=facts.name)

    state = ResolvedState(
        host=facts.name,
        release=inputs.release,
        image_tag=inputs.image_tag,
        pkg_version=inputs.pkg_version,
    )
    run_source_rules(ctx, state)

    if not facts.in_scope:
        logger.verbose(
            "RESOLVE",
            f"{facts.name} is not a master or node; skipping version checks",
        )
        return _to_result(ctx, state)

    check_consistency(ctx, state)

    if not facts.is_containerized and inputs.image_tag is not None:
        logger.warning("DERIVE", _IMAGE_TAG_IGNORED)
        state.warnings.append(_IMAGE_TAG_IGNORED)

    derive_dependents(ctx, state)
    assert_complete(ctx, state)
    return _to_result(ctx, state)


def _base_package(ctx: ResolutionContext) -> str | None:
    """Package spec installed for versioning on native hosts, if requested."""
    facts = ctx.facts
    if facts.is_containerized or not facts.install_base_package:
        return None
    pkg_version = ctx.inputs.pkg_version or ""
    return facts.service_type + image_tag_to_pkg_version(
        pkg_version, include_dash=True
    )


def _to_result(ctx: ResolutionContext, state: ResolvedState) -> ResolveResult:
    return ResolveResult(
        host=state.host,
        version=state.version,
        image_tag=state.image_tag,
        pkg_version=state.pkg_version,
        release=state.release,
        in_scope=ctx.facts.in_scope,
        version_source=state.version_source,
        rpm_version=state.rpm_version,
        base_package=_base_package(ctx) if ctx.facts.in_scope else None,
        warnings=tuple(state.warnings),
    )
