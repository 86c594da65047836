#!/usr/bin/env python3
"""
CVE Outreach - CLI Runner

Fetches recently published CVEs, picks the critical ones, and sends coffee
to the company each one hurts most.

Usage:
    python run.py [--dry-run] [--threshold <score>] [--hours <n>]
    python run.py
    python run.py --dry-run --hours 24
"""

import sys

from src.section1_ingestion import FeedUnavailable, NVDFeedClient
from src.section1_ingestion.config import FeedConfig
from src.section2_outreach.advisor import CompanyAdvisor
from src.section2_outreach.commerce import TerminalClient
from src.section2_outreach.config import OutreachConfig
from src.section2_outreach.dispatcher import ActionDispatcher
from src.section2_outreach.errors import ConfigurationError
from src.section2_outreach.pipeline import OutreachPipeline


def _option_value(args: list[str], flag: str) -> str | None:
    if flag in args:
        idx = args.index(flag)
        if idx + 1 < len(args):
            return args[idx + 1]
        raise ValueError(f"{flag} requires a value")
    return None


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns the process exit status."""
    args = sys.argv[1:] if argv is None else argv

    if "-h" in args or "--help" in args:
        print(__doc__)
        return 0

    try:
        dry_run = "--dry-run" in args
        threshold_arg = _option_value(args, "--threshold")
        hours_arg = _option_value(args, "--hours")
        threshold = float(threshold_arg) if threshold_arg is not None else FeedConfig.SCORE_THRESHOLD
        hours = int(hours_arg) if hours_arg is not None else FeedConfig.WINDOW_HOURS
        if hours <= 0:
            raise ValueError("--hours must be positive")
    except ValueError as exc:
        print(f"ERROR: {exc}")
        print(__doc__)
        return 1

    try:
        OutreachConfig.validate(require_commerce=not dry_run)
        advisor = CompanyAdvisor()
        dispatcher = None if dry_run else ActionDispatcher(TerminalClient())
        pipeline = OutreachPipeline(
            advisor=advisor,
            dispatcher=dispatcher,
            feed_client=NVDFeedClient(),
            threshold=threshold,
        )
        pipeline.run(hours=hours)
    except (ConfigurationError, FeedUnavailable) as exc:
        print(f"ERROR: {exc}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
