"""
Unit tests for the burstforge command line entrypoint.
"""
import os
import re

import httpx
import pytest

from burst.executor import HttpHarness, HttpMethod
from burstforge.cli import burst as cli

ANSI = re.compile(r"\x1b\[[0-9;]*m")


def _plain(text: str) -> str:
    return ANSI.sub("", text)


class SeenRequests(list):
    pass


@pytest.fixture
def harness_factory(monkeypatch):
    """Route the CLI's harness to a MockTransport; returns the list of seen requests."""
    seen = SeenRequests()
    state = {"handler": lambda request: httpx.Response(200, request=request)}

    def _handler(request):
        seen.append(request)
        return state["handler"](request)

    def _make(settings=None):
        return HttpHarness(client=httpx.AsyncClient(transport=httpx.MockTransport(_handler)), settings=settings)

    monkeypatch.setattr(cli, "HttpHarness", _make)
    seen.state = state
    return seen


def test_parser_defaults():
    args = cli.build_parser().parse_args(["--addr", "example.com"])
    assert args.count == 25
    assert args.method == "get"
    assert args.delay == 0
    assert args.expected == 200
    assert args.headers == []
    assert args.body is None
    assert args.logs is False


def test_parser_short_flags_and_repeatable_headers():
    args = cli.build_parser().parse_args(
        ["-a", "x.com", "-c", "3", "-m", "POST", "-b", "hi", "-d", "10", "-e", "201",
         "-H", "A: 1", "-H", "B: 2", "-l"]
    )
    config = cli.config_from_args(args)
    assert config.method is HttpMethod.POST
    assert config.count == 3
    assert config.delay_ms == 10
    assert config.expected_status == 201
    assert config.headers == ("A: 1", "B: 2")
    assert config.body == "hi"
    assert args.logs is True


def test_addr_is_required(capsys):
    with pytest.raises(SystemExit) as exc_info:
        cli.main([])
    assert exc_info.value.code != 0


@pytest.mark.parametrize("argv", [
    ["-a", "x.com", "-H", "not-a-header"],
    ["-a", "x.com", "-H", "X Bad Name: 1"],
    ["-a", "x.com", "-H", "X-Name: café"],
    ["-a", "x.com", "-H", "X-A: a\rb"],
    ["-a", "x.com", "-m", "get", "-b", "payload"],
    ["-a", "https://"],
    ["-a", "x.com", "-c", "0"],
    ["-a", "x.com", "-d", "-1"],
])
def test_config_errors_exit_1_without_sending(argv, monkeypatch, capsys):
    def _forbidden(*args, **kwargs):
        raise AssertionError("no harness may be created on a configuration error")

    monkeypatch.setattr(cli, "HttpHarness", _forbidden)

    assert cli.main(argv) == 1
    assert capsys.readouterr().err


def test_successful_run_exits_0_and_prints_summary(harness_factory, capsys):
    assert cli.main(["-a", "target.local", "-c", "5"]) == 0

    out = _plain(capsys.readouterr().out)
    assert "Successes: 5, Fails: 0" in out
    assert len(harness_factory) == 5
    assert all(r.url.scheme == "https" and r.url.host == "target.local" for r in harness_factory)


def test_all_failures_still_exit_0(harness_factory, capsys):
    def _refuse(request):
        raise httpx.ConnectError("Connection refused", request=request)

    harness_factory.state["handler"] = _refuse

    assert cli.main(["-a", "http://down.local", "-c", "4"]) == 0

    out = _plain(capsys.readouterr().out)
    assert out.count("Request failed: ConnectError: Connection refused") == 4
    assert "Successes: 0, Fails: 4" in out


def test_logs_flag_writes_run_log(harness_factory, test_config, capsys):
    harness_factory.state["handler"] = lambda request: httpx.Response(418, request=request, text="teapot")

    assert cli.main(["-a", "t.local", "-c", "2", "-l"]) == 0

    lines = open(test_config.log.run_log_file, encoding="utf-8").read().splitlines()
    assert len(lines) == 2
    assert all("ERROR] Got Unexpected Code (Expected: 200): 418 I'm a teapot, text: teapot" in line for line in lines)
    assert "Unexpected Status (see logs for more): 418" in _plain(capsys.readouterr().out)


def test_without_logs_flag_no_file_is_written(harness_factory, test_config):
    assert cli.main(["-a", "t.local", "-c", "1"]) == 0

    assert not os.path.exists(test_config.log.run_log_file)


def test_console_output_is_coloured(harness_factory, capsys):
    harness_factory.state["handler"] = lambda request: httpx.Response(404, request=request)

    assert cli.main(["-a", "t.local", "-c", "1"]) == 0

    out = capsys.readouterr().out
    assert cli.PREFIX in out
    assert cli.red("404 Not Found") in out
    assert f"Successes: {cli.green(0)}, Fails: {cli.red(1)}" in out


def test_config_error_message_is_red(capsys):
    assert cli.main(["-a", "x.com", "-H", "broken"]) == 1
    assert cli.red("Invalid header format: 'broken'. Expected 'key: value'") in capsys.readouterr().err
