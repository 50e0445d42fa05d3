import argparse
import curses
import logging
import os
import sys
from typing import Any
from typing import Optional
from typing import Sequence

import boto3
import botocore.exceptions

from capacity_coverage import terminal
from capacity_coverage.fleet import FleetCoverage
from capacity_coverage.interface import CoverageError
from capacity_coverage.inventory import InventoryFetchError
from capacity_coverage.inventory import load_fleet
from capacity_coverage.report import render_table
from capacity_coverage.views import project
from capacity_coverage.views import ViewMode
from capacity_coverage.views import ViewSelector

logger = logging.getLogger(__name__)


def ec2_client(region: Optional[str], profile: Optional[str]) -> Any:
    session = boto3.session.Session(profile_name=profile, region_name=region)
    return session.client("ec2")


def print_report(fleet: FleetCoverage, mode: ViewMode) -> None:
    print(render_table(project(fleet, mode)))


def show_terminal(fleet: FleetCoverage, mode: ViewMode) -> None:
    selector = ViewSelector()
    selector.select(mode)
    terminal.run(terminal.TerminalApp(fleet, selector))


def main(args: Any) -> int:
    try:
        client = ec2_client(region=args.region, profile=args.profile)
        fleet = load_fleet(
            client, include_retired=not args.active_only, strict=args.strict
        )
    except InventoryFetchError as exp:
        print(f"ERROR: {exp}", file=sys.stderr)
        return 1
    except botocore.exceptions.BotoCoreError as exp:
        print(
            f"ERROR: Unable to connect to EC2: {exp}. "
            "Do you have AWS credentials refreshed?",
            file=sys.stderr,
        )
        return 1
    except CoverageError as exp:
        print(f"ERROR: EC2 inventory contains bad data: {exp}", file=sys.stderr)
        return 1

    logger.debug("Aggregated %d instance type rows", len(fleet))
    if args.plain:
        try:
            print_report(fleet, args.view)
        except CoverageError as exp:
            print(f"ERROR: Unable to build {args.view} view: {exp}", file=sys.stderr)
            return 1
    else:
        try:
            show_terminal(fleet, args.view)
        except curses.error as exp:
            print(
                f"ERROR: Unable to open the interactive view: {exp}. "
                "Use --plain when not running in a terminal",
                file=sys.stderr,
            )
            return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ri-coverage",
        description=(
            "Compare running EC2 instances against Reserved Instances, per "
            "instance type and per family in normalized units."
        ),
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--region",
        default=os.environ.get("AWS_REGION", os.environ.get("AWS_DEFAULT_REGION")),
        help="AWS region, defaults from AWS_REGION or AWS_DEFAULT_REGION",
    )
    parser.add_argument(
        "--profile",
        default=os.environ.get("AWS_PROFILE"),
        help="AWS credentials profile, defaults from AWS_PROFILE",
    )
    parser.add_argument(
        "--view",
        type=ViewMode,
        default=ViewMode.instance,
        choices=list(ViewMode),
        help="Table to show first (or only, with --plain)",
    )
    parser.add_argument(
        "--plain",
        action="store_true",
        help="Print the table once instead of opening the interactive view",
    )
    parser.add_argument(
        "--active-only",
        action="store_true",
        help="Do not fetch retired Reserved Instances",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Abort on malformed instance types instead of skipping them",
    )
    parser.add_argument("--debug", action="store_true", help="Show verbose output")
    return parser


def cli(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(name)s - %(levelname)s - %(message)s",
    )
    sys.exit(main(args))


if __name__ == "__main__":
    cli()
