#!/usr/bin/env python3
import argparse
import logging
import time
from datetime import datetime, timezone

import uvicorn

from config.settings import HOST, PORT, LOG_DIR, OUTPUT_DIR, REFRESH_INTERVAL_HOURS
from api.server import create_app
from delivery.report import write_report
from models.article import AggregateResult
from sources.aggregator import NewsAggregator
from utils.logger import setup_logger


def setup_arg_parser() -> argparse.ArgumentParser:
    """Set up and return command line argument parser."""
    parser = argparse.ArgumentParser(description="Weekly Breach Monitor - data breach news from Google News")

    # General options
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    # Server options
    parser.add_argument("--host", type=str, default=HOST, help=f"Interface to bind (default: {HOST})")
    parser.add_argument("--port", type=int, default=PORT, help=f"Port to listen on (default: {PORT})")
    parser.add_argument("--no-schedule", action="store_true", help="Disable the background refresh")

    # Run options
    parser.add_argument("--run-once", action="store_true", help="Fetch once, write the report to the output directory and exit")
    parser.add_argument("--output-dir", type=str, default=OUTPUT_DIR, help=f"Directory for rendered reports (default: {OUTPUT_DIR})")

    return parser


def print_summary(result: AggregateResult) -> None:
    """Display the collected articles on the console."""
    print("\n" + "=" * 80)
    print(f"WEEKLY DATA BREACH NEWS - {result.date_range.start} to {result.date_range.end}")
    print("=" * 80)

    for i, article in enumerate(result.articles):
        print(f"\n{i+1}. {article.title}")
        print(f"   Source: {article.source} | {article.pub_date} ({article.time_ago}) | {article.search_term}")
        print(f"   URL: {article.link}")
        print(f"   Keywords: {', '.join(article.keywords)}")

    print(f"\n{result.article_count} articles from {result.source_count} sources")
    print("=" * 80 + "\n")


def run_once(output_dir: str) -> None:
    """Fetch all feeds once and publish the report."""
    logger = logging.getLogger(__name__)
    start_time = time.time()

    result = NewsAggregator().build_result(datetime.now(timezone.utc))
    report_path = write_report(result, output_dir)
    print_summary(result)

    elapsed_time = time.time() - start_time
    logger.info(f"Report written to {report_path} in {elapsed_time:.2f} seconds")


def serve(host: str, port: int, output_dir: str, refresh_interval_hours: float) -> None:
    logger = logging.getLogger(__name__)
    app = create_app(output_dir=output_dir, refresh_interval_hours=refresh_interval_hours)

    base_url = f"http://localhost:{port}"
    logger.info(f"Breach news API server running on port {port}")
    logger.info(f"API endpoint: {base_url}/api/breach-news")
    logger.info(f"HTML report: {base_url}/report")
    logger.info(f"Health check: {base_url}/health")

    uvicorn.run(app, host=host, port=port, log_config=None)


def main() -> None:
    """Main entry point."""
    parser = setup_arg_parser()
    args = parser.parse_args()

    log_level = logging.DEBUG if args.debug else logging.INFO
    logger = setup_logger(log_dir=LOG_DIR, log_level=log_level)

    logger.info("Starting Weekly Breach Monitor")

    if args.run_once:
        logger.info("Running in one-time mode")
        run_once(args.output_dir)
        return

    interval = 0 if args.no_schedule else REFRESH_INTERVAL_HOURS
    try:
        serve(args.host, args.port, args.output_dir, interval)
    except KeyboardInterrupt:
        logger.info("Keyboard interrupt received, shutting down")


if __name__ == "__main__":
    main()
