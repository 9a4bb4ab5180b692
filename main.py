'''
Orchestrator

Single responsibility: glue the pipeline together.

Responsibilities:
- Parse CLI arguments
- Load the feed through a FeedSession
- Derive the view and write exports + Markdown summary
- Optionally re-run on the auto-refresh interval

This file contains no business logic.

'''
import argparse
import locale
import logging
import sys
import time

from ThreatFeed.Ingest.loader import load_feed
from ThreatFeed.Reporting.feed_exporter import write_exports
from ThreatFeed.Reporting.summary_renderer import write_summary
from ThreatFeed.Session.feed_session import FeedSession
from ThreatFeed.Settings.settings import get_config
from ThreatFeed.View.view_config import ViewConfig

logger = logging.getLogger("threatfeed")


def parse_args(argv=None):
    config = get_config()
    p = argparse.ArgumentParser(description="ThreatFeed IOC dashboard pipeline")
    p.add_argument("input", nargs="?", help="IOC feed JSON path")
    p.add_argument("--outdir", "-o", default="out")
    p.add_argument("--sample", action="store_true")
    p.add_argument("--search", "-s", default="")
    p.add_argument("--type", dest="type_filter", choices=config.type_filters, default="all")
    p.add_argument("--sort", choices=config.sort_modes, default=config.default_sort)
    p.add_argument("--page", type=int, default=1)
    p.add_argument("--page-size", type=int, choices=config.page_sizes, default=config.default_page_size)
    p.add_argument("--auto-refresh", action="store_true", help=f"Re-run every {config.refresh_interval}s")
    p.add_argument("--verbose", "-v", action="store_true")
    return p.parse_args(argv)


def run_once(session, args, view_config):
    session.refresh(lambda: load_feed(path=args.input, use_sample=args.sample))
    if session.error:
        print(session.error, file=sys.stderr)

    state = session.view(view_config)
    write_exports(state.filtered, args.outdir)
    write_summary(state, args.outdir)

    page = state.page
    print(f"{len(state.records)} IOCs, {len(state.filtered)} matching, page {page['page']} of {page['total_pages']}")
    return state


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # alpha sort collates with the user's locale
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error:
        logger.warning("Unsupported locale; alpha sort falls back to codepoint order")

    if args.page < 1:
        print("--page must be >= 1", file=sys.stderr)
        return 1

    view_config = ViewConfig(
        search=args.search,
        type_filter=args.type_filter,
        sort=args.sort,
        page=args.page,
        page_size=args.page_size,
    )
    session = FeedSession()

    state = run_once(session, args, view_config)
    if not args.auto_refresh:
        return 1 if session.error and not state.records else 0

    interval = get_config().refresh_interval
    try:
        while True:
            time.sleep(interval)
            run_once(session, args, view_config)
    except KeyboardInterrupt:
        logger.info("Auto-refresh stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())
