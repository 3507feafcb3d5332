"""
Command-line front end for sfsquery.

Looks up one IP address, prints everything the service returned and the
moderation verdict a forum would reach for a comment from that address.
"""

import sys
import argparse
import os
import logging
from datetime import datetime, timezone
from typing import List, Optional

from .client import SFSQuery, QueryMode
from .config import DEBUG_LEVELS, config

# (days, minimum confidence, verdict), checked in order
VERDICT_RULES = (
    (7, 75.0, 'reject'),
    (30, 20.0, 'review'),
)

VERDICT_MESSAGES = {
    'reject': "This user's comment would be rejected outright",
    'review': "This user's comment would be flagged for moderator review",
    'accept': "This user's comment would be accepted",
}


def moderation_verdict(sfs: SFSQuery) -> str:
    """
    Decide what to do with a comment from the queried address.

    Args:
        sfs: Client for the commenter's address

    Returns:
        'reject', 'review' or 'accept'
    """
    for days, min_confidence, verdict in VERDICT_RULES:
        if sfs.was_reported_in_past_days(days) and sfs.get_confidence() >= min_confidence:
            return verdict
    return 'accept'


def _format_timestamp(epoch: int) -> str:
    """Render an epoch timestamp for display."""
    return datetime.fromtimestamp(epoch, tz=timezone.utc).strftime('%Y-%m-%d %H:%M:%S')


def print_report(sfs: SFSQuery):
    """Print every getter of a client."""
    if sfs.mode is QueryMode.DNS:
        print(f"  get_dns_response(): {sfs.get_dns_response()}")
    else:
        print(f"  get_api_response(): {sfs.get_api_response()}")
    print(f"  get_appears(): {sfs.get_appears()}")
    print(f"  get_asn(): {sfs.get_asn()}")
    print(f"  get_confidence(): {sfs.get_confidence()}")
    print(f"  get_country(): {sfs.get_country()}")
    print(f"  get_error(): {sfs.get_error()}")
    print(f"  get_frequency(): {sfs.get_frequency()}")
    print(f"  get_ip(): {sfs.get_ip()}")
    print(f"  get_last_seen(): {sfs.get_last_seen()} ({_format_timestamp(sfs.get_last_seen())})")


def main(argv: Optional[List[str]] = None):
    """Command-line entry point for the StopForumSpam lookup."""
    parser = argparse.ArgumentParser(
        description='Look up an IP address at StopForumSpam',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Query Methods:
  API  - JSON web API over plain HTTP (default)
  DNS  - DNSBL lookup; no ASN or country, IPv4 only

Environment Variables:
  SFSQUERY_QUERY_METHOD=DNS          - Use the DNSBL by default
  SFSQUERY_REQUEST_TIMEOUT=3         - HTTP connect/read timeout in seconds
  SFSQUERY_TRANSPORTS=urllib,socket  - HTTP transports allowed, in priority order
  SFSQUERY_API_HOST=...              - Regional API server
  SFSQUERY_DEBUG=true                - Enable debug mode with diagnostic output
  SFSQUERY_DEBUG_LEVEL=basic         - Debug verbosity: basic, detailed, verbose

Examples:
  python -m sfsquery.cli 5.135.189.186
  python -m sfsquery.cli --dns 188.35.167.7
  python -m sfsquery.cli --days 30 5.135.189.186
"""
    )

    parser.add_argument('ip', help='IP address to look up')
    method = parser.add_mutually_exclusive_group()
    method.add_argument('--dns', action='store_true',
                        help='Query the DNSBL instead of the web API')
    method.add_argument('--api', action='store_true',
                        help='Query the web API (overrides SFSQUERY_QUERY_METHOD)')
    parser.add_argument('--days', type=int, default=None,
                        help='Also report whether the address was reported in the past N days')
    parser.add_argument('--debug', action='store_true',
                        help='Enable debug mode with low-level diagnostic output')
    parser.add_argument('--debug-level', choices=DEBUG_LEVELS, default='basic',
                        help='Debug verbosity level (default: basic)')

    args = parser.parse_args(argv)

    if args.debug:
        os.environ['SFSQUERY_DEBUG'] = 'true'
        os.environ['SFSQUERY_DEBUG_LEVEL'] = args.debug_level
        logging.basicConfig(level=logging.DEBUG)

    if args.dns:
        mode = QueryMode.DNS
    elif args.api:
        mode = QueryMode.API
    else:
        mode = QueryMode(config.get_query_method())

    sfs = SFSQuery(args.ip, mode=mode)

    print(f"StopForumSpam {mode} query for {args.ip}:")
    print_report(sfs)

    if args.days is not None:
        print(f"  was_reported_in_past_days({args.days}): {sfs.was_reported_in_past_days(args.days)}")

    print()
    print(VERDICT_MESSAGES[moderation_verdict(sfs)])

    if sfs.get_error():
        sys.exit(1)


if __name__ == "__main__":
    main()
