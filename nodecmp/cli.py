#!/usr/bin/env python3
"""
Node Compare CLI

Prints the version of every reachable peer common to all given snapshots.
"""

import argparse
import sys
from typing import List, Optional

from .comparison import NodeComparer
from .comparison_components.config_helper import create_config
from .core.errors import NodecmpError
from .core.logging import get_logger, setup_logging

# Configure logger for CLI
logger = get_logger(__name__)

USAGE = "Usage: nodecmp [path1] [path2] ... [pathN]"


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser"""
    parser = argparse.ArgumentParser(
        prog='nodecmp',
        usage=USAGE[len("Usage: "):],
        description="Node Compare - Versions of peers common to several snapshots",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Probe the peers found in every snapshot
  nodecmp nodes-a.json nodes-b.json nodes-c.json

  # Fail fast on slow peers
  nodecmp nodes-a.json nodes-b.json --strict

  # Only list the common peers
  nodecmp nodes-a.json nodes-b.json --common-only
        """
    )
    parser.add_argument('paths', nargs='*', help='Snapshot files to compare')
    parser.add_argument(
        '--timeout',
        type=float,
        help='Connect and read timeout in seconds (default: 60)'
    )
    parser.add_argument(
        '--strict',
        action='store_true',
        help='Use the strict timeout preset (0.1s) unless --timeout is given'
    )
    parser.add_argument(
        '--client-version',
        help='Version string announced to peers (default: 1.2.0)'
    )
    parser.add_argument(
        '--config',
        help='YAML file with timeout/client_version settings'
    )
    parser.add_argument(
        '--common-only',
        action='store_true',
        help='Print the common peers without probing them'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose logging'
    )
    return parser


def print_common_peers(comparer: NodeComparer, paths: List[str]) -> None:
    """Print each common peer with its outbound flag"""
    for address, outbound in sorted(comparer.common_peers(paths).items()):
        print(f"{address} ({'outbound' if outbound else 'inbound'})")


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    if len(args.paths) < 2:
        print(USAGE)
        return 0

    setup_logging(verbose=args.verbose)
    if args.verbose:
        logger.info("Verbose logging enabled")

    try:
        config = create_config(
            config_file=args.config,
            timeout=args.timeout,
            client_version=args.client_version,
            strict=args.strict
        )
        comparer = NodeComparer(
            timeout=config.timeout,
            client_version=config.client_version,
            max_version_length=config.max_version_length
        )
        if args.common_only:
            print_common_peers(comparer, args.paths)
        else:
            comparer.compare(args.paths)
    except NodecmpError as e:
        logger.debug(f"Run aborted: {e!r}")
        print(str(e), file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("Comparison cancelled by user", file=sys.stderr)
        sys.exit(1)

    return 0


if __name__ == "__main__":
    sys.exit(main())
