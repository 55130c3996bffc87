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

"""Command-line interface for ocpversion.

This module provides the main CLI entry point for the ocpversion tool,
offering commands for host profile validation, version resolution, and
image tag checks.

Commands:

    validate: Validate host profile syntax and configuration
    resolve: Resolve version, image tag and package version for hosts
    check-tag: Check an image tag against a deployment type's format

Example:
    Validate a host profile:
        ```bash
        $ ocpversion validate inventory/hosts/master1.yaml
        ```

    Resolve several hosts:
        ```bash
        $ ocpversion resolve inventory/hosts/*.yaml
        ```

    Check an image tag:
        ```bash
        $ ocpversion check-tag v3.6.1 --deployment-type origin
        ```

    Enable debug output:
        ```bash
        $ ocpversion resolve inventory/hosts/node1.yaml --debug
        ```

Exit Codes:

- 0: Success
- 1: Error (configuration, lookup, or resolution failure)

Note:
    The CLI uses argparse for command parsing.
    Each command has its own handler function (cmd_<command>).
    Verbose mode shows full tracebacks on errors for debugging.
    Debug mode implies verbose mode and shows detailed configuration dumps.

"""

from __future__ import annotations

import argparse
from importlib.metadata import version
from pathlib import Path
import sys

from ocpversion.core import resolve_hosts
from ocpversion.exceptions import FormatError
from ocpversion.logging import get_logger, set_global_logger
from ocpversion.validation import validate_host_profile
from ocpversion.versioning.grammar import TAG_GRAMMARS, validate_image_tag


def _display(value: str | None) -> str:
    return value if value is not None else "(undefined)"


def cmd_validate(args: argparse.Namespace) -> int:
    """Handler for 'ocpversion validate' command.

    Validates host profile syntax and configuration without running
    repoquery or docker.

    Args:
        args: Parsed command-line arguments containing
            profile path and verbose flag.

    Returns:
        Exit code (0 for valid profile, 1 for invalid).

    """
    logger = get_logger(verbose=args.verbose, debug=False)
    set_global_logger(logger)

    profile_path = Path(args.profile).resolve()

    print(f"Validating host profile: {profile_path}")
    print()

    result = validate_host_profile(profile_path)

    print("=" * 70)
    print("VALIDATION RESULTS")
    print("=" * 70)
    print(f"Profile:     {result.profile_path}")
    print(f"Host:        {_display(result.host)}")
    print(f"Status:      {result.status.upper()}")
    print()

    if result.warnings:
        print(f"Warnings ({len(result.warnings)}):")
        for warning in result.warnings:
            print(f"  [WARNING] {warning}")
        print()

    if result.errors:
        print(f"Errors ({len(result.errors)}):")
        for error in result.errors:
            print(f"  [X] {error}")
        print()

    print("=" * 70)

    if result.status == "valid":
        print()
        print("[SUCCESS] Host profile is valid!")
        return 0
    else:
        print()
        print(
            f"[FAILED] Profile validation failed with {len(result.errors)} error(s)."
        )
        return 1


def cmd_resolve(args: argparse.Namespace) -> int:
    """Handler for 'ocpversion resolve' command.

    Resolves each host profile independently. A failure for one host is
    reported and the remaining hosts are still resolved.

    Args:
        args: Parsed command-line arguments containing
            profile paths and flags.

    Returns:
        Exit code (0 when every host resolved, 1 otherwise).

    """
    logger = get_logger(verbose=args.verbose, debug=args.debug)
    set_global_logger(logger)

    paths = [Path(p).resolve() for p in args.profiles]
    outcomes = resolve_hosts(paths)

    failed = 0
    for outcome in outcomes:
        print("=" * 70)
        if outcome.error is not None:
            failed += 1
            print(f"RESOLUTION FAILED: {outcome.profile_path}")
            print("=" * 70)
            print(f"Error: {outcome.error}")
            if args.verbose or args.debug:
                import traceback

                traceback.print_exception(outcome.error)
            print()
            continue

        result = outcome.result
        print(f"RESOLUTION RESULTS: {result.host}")
        print("=" * 70)
        print(f"openshift_release:      {_display(result.release)}")
        print(f"openshift_image_tag:    {_display(result.image_tag)}")
        print(f"openshift_pkg_version:  {_display(result.pkg_version)}")
        if result.version is not None:
            print(f"openshift_version:      {result.version}")
        if result.version_source is not None:
            print(f"Version Source:         {result.version_source}")
        if result.base_package is not None:
            print(f"Base Package:           {result.base_package}")
        if not result.in_scope:
            print("Scope:                  not a master or node")
        for warning in result.warnings:
            print(f"  [WARNING] {warning}")
        print()

    print("=" * 70)
    print()
    if failed:
        print(f"[FAILED] {failed} of {len(outcomes)} host(s) failed to resolve.")
        return 1
    print(f"[SUCCESS] Resolved {len(outcomes)} host(s)!")
    return 0


def cmd_check_tag(args: argparse.Namespace) -> int:
    """Handler for 'ocpversion check-tag' command.

    Args:
        args: Parsed command-line arguments containing the tag and
            deployment type.

    Returns:
        Exit code (0 when the tag is acceptable, 1 otherwise).

    """
    logger = get_logger(verbose=args.verbose, debug=False)
    set_global_logger(logger)

    try:
        validate_image_tag(args.tag, args.deployment_type)
    except FormatError as err:
        print(f"[FAILED] {err}")
        return 1

    if args.deployment_type not in TAG_GRAMMARS:
        print(
            f"[SUCCESS] No tag format is defined for {args.deployment_type}; "
            f"{args.tag} accepted."
        )
    else:
        print(f"[SUCCESS] {args.tag} is a valid {args.deployment_type} image tag.")
    return 0


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the ocpversion CLI.

    This function is registered as the 'ocpversion' console script in
    pyproject.toml.
    """
    parser = argparse.ArgumentParser(
        prog="ocpversion",
        description="Resolve OpenShift version, image tag and package version",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"ocpversion {version('ocpversion')}",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        required=True,
    )

    # 'validate' command
    parser_validate = subparsers.add_parser(
        "validate",
        help="Validate host profile syntax and configuration (no lookups)",
        description="Check a host profile for configuration issues without "
        "querying repositories or images.",
    )
    parser_validate.add_argument(
        "profile",
        help="Path to the host profile YAML file",
    )
    parser_validate.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show validation progress and details",
    )
    parser_validate.set_defaults(func=cmd_validate)

    # 'resolve' command
    parser_resolve = subparsers.add_parser(
        "resolve",
        help="Resolve version, image tag and package version",
        description="Resolve each host profile independently and print the "
        "resulting openshift_* values.",
    )
    parser_resolve.add_argument(
        "profiles",
        nargs="+",
        help="Paths to host profile YAML files",
    )
    parser_resolve.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show progress and high-level status updates",
    )
    parser_resolve.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Show detailed debugging output (implies --verbose)",
    )
    parser_resolve.set_defaults(func=cmd_resolve)

    # 'check-tag' command
    parser_check = subparsers.add_parser(
        "check-tag",
        help="Check an image tag against a deployment type's format",
    )
    parser_check.add_argument(
        "tag",
        help="Image tag to check (e.g., v3.6.1)",
    )
    parser_check.add_argument(
        "--deployment-type",
        default="origin",
        help="Deployment type whose tag format applies (default: origin)",
    )
    parser_check.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show progress and high-level status updates",
    )
    parser_check.set_defaults(func=cmd_check_tag)

    args = parser.parse_args(argv)

    exit_code = args.func(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
