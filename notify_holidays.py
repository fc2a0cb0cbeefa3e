#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Post today's public holidays for a list of countries to a Slack channel.

Usage:
  export SLACK_WEBHOOK_URL="https://hooks.slack.com/services/..."
  export ABSTRACT_API_KEY="YOUR_API_KEY"
  python notify_holidays.py US,GB,AU
  python notify_holidays.py --date 2024-12-25 US,GB
  python notify_holidays.py --source nager --date 2024-01-01 US,UK
"""

import argparse
import sys
from datetime import date, datetime
from typing import List, Optional

from config import SOURCE_ABSTRACT, SOURCES, Config, ConfigError, load_config
from holiday_message import build_message
from holiday_sources import (
    AbstractHolidaySource,
    HolidaySource,
    NagerHolidaySource,
    fetch_all,
    parse_country_codes,
)
from slack_notifier import SlackWebhookError, send_to_slack


def parse_date(value: str) -> date:
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date {value!r} (expected YYYY-MM-DD)")


def parse_countries(value: str) -> List[str]:
    codes = parse_country_codes(value)
    if not codes:
        raise argparse.ArgumentTypeError("at least one country code is required")
    return codes


def make_source(config: Config) -> HolidaySource:
    if config.source == SOURCE_ABSTRACT:
        return AbstractHolidaySource(config.abstract_api_key, config.rate_limit_seconds)
    return NagerHolidaySource(config.holiday_types)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Post public holidays for the given countries to Slack.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment:
  SLACK_WEBHOOK_URL            Slack incoming webhook (required)
  ABSTRACT_API_KEY             Abstract holidays API key (required for --source abstract)
  ABSTRACT_RATE_LIMIT_SECONDS  Pause after each Abstract request (default: 1.0)
  NAGER_HOLIDAY_TYPES          Holiday types to announce with --source nager (default: Public,Optional)

SLACK_WEBHOOK_URL is not needed with --dry-run.

Examples:
  # Today's holidays in the US, the UK and Australia
  python notify_holidays.py US,GB,AU

  # Preview the message for a given day without posting it
  python notify_holidays.py --source nager --date 2024-01-01 --dry-run US,GB
        """
    )

    parser.add_argument(
        "countries",
        type=parse_countries,
        help='Comma-separated list of 2-letter country codes (ISO 3166-1 alpha-2, e.g. "US,UK,AU")'
    )
    parser.add_argument(
        "--date",
        type=parse_date,
        default=None,
        help="Date to fetch in ISO 8601 format (YYYY-MM-DD, defaults to the current day)"
    )
    parser.add_argument(
        "--source",
        choices=SOURCES,
        default=SOURCE_ABSTRACT,
        help=f"Holiday data source (default: {SOURCE_ABSTRACT})"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the Slack message instead of posting it"
    )
    return parser


def main(argv: Optional[List[str]] = None, source: Optional[HolidaySource] = None) -> int:
    """Main entry point for the script."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.source, require_webhook=not args.dry_run)
    except ConfigError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    if source is None:
        source = make_source(config)

    day = args.date or date.today()
    print(f"Sending holidays for {day.isoformat()} ({source.name}: {', '.join(args.countries)})")

    holidays = fetch_all(source, args.countries, day)
    for holiday in holidays:
        print(f"  {holiday}")

    message = build_message(holidays)
    if message is None:
        print("No holidays found. Nothing to send.")
        return 0

    print(message.to_json(indent=2))
    if args.dry_run:
        return 0

    try:
        send_to_slack(config.slack_webhook_url, message)
    except SlackWebhookError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    print(f"OK: sent {len(holidays)} holidays to Slack")
    return 0


if __name__ == "__main__":
    sys.exit(main())
