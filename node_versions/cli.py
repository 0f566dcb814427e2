"""
Command-line interface for the node-versions tool.
"""

import argparse
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

from .errors import NodeVersionsError
from .filters import Filters
from .models import STATUS_KEYS
from .reporting import EXPORT_FORMATS, build_status_frame, export_status, print_summary
from .repositories import DEFAULT_RELEASES_URL, DEFAULT_SCHEDULE_URL, DEFAULT_TIMEOUT
from .versions import NodeVersions


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Classify and filter Node.js versions by their release lifecycle"
    )

    parser.add_argument(
        "versions",
        nargs="*",
        help="Versions to check. Default: every significant version in the schedule"
    )

    parser.add_argument(
        "--absolute",
        action="store_true",
        help="Filter every absolute release instead of the significant versions"
    )

    parser.add_argument(
        "--now",
        default=None,
        help="Date to classify against (YYYY-MM-DD). Default: today"
    )

    parser.add_argument(
        "--these",
        nargs="+",
        default=None,
        help="Only keep these versions"
    )

    parser.add_argument(
        "--between",
        nargs=2,
        metavar=("GTE", "LTE"),
        default=None,
        help="Only keep versions within these two versions (inclusive)"
    )

    parser.add_argument("--lte", default=None, help="Only keep versions <= this version")
    parser.add_argument("--gte", default=None, help="Only keep versions >= this version")

    parser.add_argument(
        "--range",
        default=None,
        help="Only keep versions within this range, e.g. '>=10 <16 || 18'"
    )

    for name, camel in STATUS_KEYS.items():
        parser.add_argument(
            f"--{name.replace('_', '-')}",
            dest=name,
            action=argparse.BooleanOptionalAction,
            default=None,
            help=f"Require the {camel} flag to be true (or false with --no-)"
        )

    parser.add_argument(
        "--status",
        action="store_true",
        help="Print the full lifecycle status of each matching version as JSON"
    )

    parser.add_argument(
        "--camel-case",
        action="store_true",
        help="Use camelCase status keys in JSON output"
    )

    parser.add_argument(
        "--schedule-source",
        default=DEFAULT_SCHEDULE_URL,
        help=f"URL or path of the release schedule. Default: {DEFAULT_SCHEDULE_URL}"
    )

    parser.add_argument(
        "--releases-source",
        default=DEFAULT_RELEASES_URL,
        help=f"URL or path of the release index. Default: {DEFAULT_RELEASES_URL}"
    )

    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help=f"HTTP timeout in seconds. Default: {DEFAULT_TIMEOUT}"
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Export the status of matching versions to this directory"
    )

    parser.add_argument(
        "--format",
        choices=EXPORT_FORMATS,
        default="json",
        help="Export format. Default: json"
    )

    parser.add_argument(
        "--name",
        default="node",
        help="Base name of exported files. Default: node"
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    return parser


def filters_from_args(args: argparse.Namespace) -> Filters:
    values = {
        "these": args.these,
        "between": args.between,
        "lte": args.lte,
        "gte": args.gte,
        "range": args.range,
    }
    for name in STATUS_KEYS:
        values[name] = getattr(args, name)
    return Filters(**values)


def main(argv=None):
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Parse dates
    now = None
    if args.now:
        try:
            now = datetime.strptime(args.now, "%Y-%m-%d").replace(tzinfo=timezone.utc)
        except ValueError:
            print("Error: Invalid now format. Use YYYY-MM-DD", file=sys.stderr)
            sys.exit(1)

    nv = NodeVersions(
        schedule_source=args.schedule_source,
        releases_source=args.releases_source,
        timeout=args.timeout,
        now=now,
    )

    try:
        filters = filters_from_args(args)
        nv.preload()

        if args.versions:
            candidates = args.versions
        elif args.absolute:
            candidates = nv.data.release_identifiers()
        else:
            candidates = nv.data.schedule_identifiers()

        selected = nv.filter(candidates, filters)

        if args.status:
            statuses = {
                version: nv.classify(version).to_dict(camel_case=args.camel_case)
                for version in selected
            }
            print(json.dumps(statuses, indent=2))
        else:
            for version in selected:
                print(version)

        if args.output_dir:
            frame = build_status_frame(nv, selected, camel_case=args.camel_case)
            print_summary(frame, nv.now())
            output_file = export_status(frame, Path(args.output_dir), args.name, args.format)
            print(f"Status saved to: {output_file}", file=sys.stderr)

    except (NodeVersionsError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
