#!/usr/bin/env python3
# cli.py: command-line front end for reqtimer

import argparse
import asyncio
import logging
import sys

from reqtimer.config import ArgumentError, RunConfig, load_config
from reqtimer.logging_config import setup_logging
from reqtimer.rendering import render_latency_histogram
from reqtimer.runner import RoundRunner

DESCRIPTION = """Measure time to get request.
Makes http requests in rounds and reports the amount of time they took."""


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        raise ArgumentError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="reqtimer",
        description=DESCRIPTION,
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument("urls", nargs="*", metavar="URL", help="http or https URLs to time")

    # Rounds
    parser.add_argument("-t", dest="timeout_ms", type=int, default=1000, help="timeout in milliseconds")
    parser.add_argument("-c", dest="count", type=int, default=1, help="number of requests per url")
    parser.add_argument("-w", dest="wait_ms", type=int, default=500, help="milliseconds to wait between each call")
    parser.add_argument(
        "--abandon-pending",
        action="store_true",
        help="let requests still running at a round timeout finish in the background",
    )

    # Transport
    parser.add_argument("-i", dest="ip", default=None, help="ip to send requests to")
    parser.add_argument("-p", dest="port", type=int, default=None, help="tcp port to connect to")
    parser.add_argument("-k", dest="insecure", action="store_true", help="skip tls certificate verification")

    # Output
    parser.add_argument("--quiet", action="store_true", help="dont show that much output")
    parser.add_argument(
        "--report-interval",
        dest="report_interval_s",
        type=float,
        default=5.0,
        help="report timings at this interval (seconds)",
    )
    parser.add_argument(
        "--histogram",
        action="store_true",
        help="print a histogram of round timings at the end",
    )

    # Logging & Debugging
    parser.add_argument("--debug", action="store_true", help="Enable debug-level logging")
    parser.add_argument("--log-file", type=str, default=None, help="Optional file to write logs to")

    return parser


def parse_config(argv=None) -> tuple[RunConfig, argparse.Namespace]:
    args = build_parser().parse_args(argv)
    config = load_config(
        urls=args.urls,
        timeout_ms=args.timeout_ms,
        count=args.count,
        ip=args.ip,
        port=args.port,
        insecure=args.insecure,
        wait_ms=args.wait_ms,
        quiet=args.quiet,
        report_interval_s=args.report_interval_s,
        cancel_pending=not args.abandon_pending,
    )
    return config, args


async def run(config: RunConfig, histogram: bool = False) -> int:
    runner = RoundRunner(
        urls=config.urls,
        transport=config.transport(),
        count=config.count,
        timeout_s=config.timeout_s,
        wait_s=config.wait_s,
        report_interval_s=config.report_interval_s,
        quiet=config.quiet,
        cancel_pending=config.cancel_pending,
        handle_signals=True,
    )
    await runner.run()

    if histogram:
        print()
        print(render_latency_histogram(runner.reporter.samples))
    return 0


def main(argv=None) -> int:
    try:
        config, args = parse_config(argv)
    except ArgumentError as e:
        print(f"Error: {e}")
        return 1

    setup_logging(level="DEBUG" if args.debug else "INFO", log_file=args.log_file)
    logging.info(
        f"Timing {len(config.urls)} URLs | rounds={config.count} | "
        f"timeout={config.timeout_ms}ms | wait={config.wait_ms}ms"
    )
    return asyncio.run(run(config, histogram=args.histogram))


if __name__ == "__main__":
    sys.exit(main())
