"""
BurstForge CLI — send a fixed-size burst of HTTP requests and count the results.

Usage examples:
    python -m burstforge.cli.burst --addr example.com
    python -m burstforge.cli.burst -a http://localhost:8000/api -c 100 -d 50
    python -m burstforge.cli.burst -a api.local -m post -b '{"x": 1}' -H "Content-Type: application/json" -l
"""

import argparse
import asyncio
import sys
import time
from typing import Optional, Sequence

from colorama import Fore, Style, just_fix_windows_console

from burst import __version__
from burst.base.config import BurstConfig, get_config, setup_logging
from burst.errors import ConfigError
from burst.executor import Dispatcher, HttpHarness, HttpMethod, RequestConfig, RunResult, build
from burst.executor.models import ExecutionOutcome, Failed, RequestTemplate, Responded, Verdict
from burst.reporting import RunLog

PREFIX = f"{Fore.BLUE}{Style.BRIGHT}[>]{Style.RESET_ALL}"


def blue(text, bold: bool = False) -> str:
    return f"{Fore.BLUE}{Style.BRIGHT if bold else ''}{text}{Style.RESET_ALL}"


def red(text) -> str:
    return f"{Fore.RED}{text}{Style.RESET_ALL}"


def green(text) -> str:
    return f"{Fore.GREEN}{text}{Style.RESET_ALL}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="burstforge",
        description="Send a burst of HTTP requests and report how many got the expected status.",
    )
    parser.add_argument("-a", "--addr", required=True, help="Target URL or host (https:// is assumed)")
    parser.add_argument("-c", "--count", type=int, default=25, help="Number of requests (default: 25)")
    parser.add_argument(
        "-m", "--method",
        type=str.lower,
        default=HttpMethod.GET.cli_name,
        choices=[m.cli_name for m in HttpMethod],
        help="HTTP method (default: get)",
    )
    parser.add_argument("-b", "--body", help="Request body (post, put and patch only)")
    parser.add_argument("-d", "--delay", type=int, default=0, help="Milliseconds between launches (default: 0)")
    parser.add_argument(
        "-e", "--expected", dest="expected", type=int, default=200,
        help="Status code counted as success (default: 200)",
    )
    parser.add_argument(
        "-H", "--headers", action="append", default=[], metavar="'KEY: VALUE'",
        help="Extra request header, repeatable",
    )
    parser.add_argument("-l", "--logs", action="store_true", help="Write every outcome to the run log file")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def config_from_args(args: argparse.Namespace) -> RequestConfig:
    return RequestConfig.create(
        address=args.addr,
        method=args.method,
        headers=tuple(args.headers),
        body=args.body,
        expected_status=args.expected,
        count=args.count,
        delay_ms=args.delay,
    )


def countdown(template: RequestTemplate, count: int, seconds: int) -> None:
    for remaining in range(seconds, 0, -1):
        print(
            f"{PREFIX} Going to send {blue(count)} requests to {blue(template.url)}, in {blue(remaining, bold=True)} seconds",
            end="\r",
            flush=True,
        )
        time.sleep(1)
    print(f"{PREFIX} Going to send: {blue(count)} requests to: {blue(template.url)}, {blue('has started..', bold=True)}")


def print_failure(outcome: ExecutionOutcome, verdict: Verdict) -> None:
    if verdict.is_success:
        return
    if isinstance(outcome, Failed):
        print(f"{PREFIX} Request failed: {red(outcome.error)}")
    elif isinstance(outcome, Responded):
        print(f"{PREFIX} Unexpected Status (see logs for more): {red(outcome.status_line)}")


async def run_burst(config: RequestConfig, template: RequestTemplate, logs: bool,
                    settings: BurstConfig, harness: Optional[HttpHarness] = None) -> RunResult:
    """Dispatch the burst with the run log and console notices attached."""
    harness = harness or HttpHarness(settings=settings.http)
    run_log = RunLog(settings.log.run_log_file, enabled=logs, expected_status=config.expected_status)
    dispatcher = Dispatcher(harness, expected_status=config.expected_status)
    dispatcher.on_outcome.connect(run_log.record)
    dispatcher.on_outcome.connect(print_failure)

    with run_log:
        try:
            print(f"{PREFIX} Waiting for requests to finish")
            return await dispatcher.run(template, config.count, config.delay_ms)
        finally:
            await harness.aclose()


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    just_fix_windows_console()
    settings = get_config()
    setup_logging(settings)

    try:
        config = config_from_args(args)
        template = build(config)
    except ConfigError as e:
        print(f"{PREFIX} {red(e.message)}", file=sys.stderr)
        return 1

    countdown(template, config.count, settings.countdown_seconds)
    result = asyncio.run(run_burst(config, template, args.logs, settings))

    print(
        f"{PREFIX} Done ({blue(f'{result.elapsed_ms:.0f}')} ms)! "
        f"Successes: {green(result.successes)}, Fails: {red(result.failures)}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
