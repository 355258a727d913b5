"""
End-to-end bursts: template -> dispatcher -> harness -> classifier -> aggregator,
with httpx.MockTransport standing in for the target server.
"""
import itertools
import re

import httpx
import pytest

from burst.executor import Dispatcher, HttpHarness, RequestConfig, build
from burst.reporting import RunLog

LINE = re.compile(r"^\[\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\.\d{3} (INFO|ERROR)\] ")


async def _run(config: RequestConfig, handler, run_log: RunLog = None):
    template = build(config)
    async with HttpHarness(client=httpx.AsyncClient(transport=httpx.MockTransport(handler))) as harness:
        dispatcher = Dispatcher(harness, expected_status=config.expected_status)
        if run_log is not None:
            dispatcher.on_outcome.connect(run_log.record)
        try:
            return await dispatcher.run(template, config.count, config.delay_ms)
        finally:
            await harness.client.aclose()


def _levels(path):
    return [LINE.match(line).group(1) for line in path.read_text(encoding="utf-8").splitlines()]


@pytest.mark.anyio
async def test_all_expected_status():
    result = await _run(
        RequestConfig(address="target.local", count=5, expected_status=200),
        lambda request: httpx.Response(200, request=request),
    )
    assert (result.successes, result.failures) == (5, 0)


@pytest.mark.anyio
async def test_mixed_statuses_are_counted_and_logged(tmp_path):
    # 3 of 10 requests get a 404
    counter = itertools.count()

    def _handler(request):
        n = next(counter)
        status = 404 if n % 10 in (1, 4, 7) else 200
        return httpx.Response(status, request=request, text="nope" if status == 404 else "ok")

    path = tmp_path / "http_stress_test.log"
    with RunLog(path, expected_status=200) as run_log:
        result = await _run(RequestConfig(address="target.local", count=10), _handler, run_log)

    assert (result.successes, result.failures) == (7, 3)
    levels = _levels(path)
    assert levels.count("INFO") == 7
    assert levels.count("ERROR") == 3


@pytest.mark.anyio
async def test_unreachable_host(tmp_path):
    def _handler(request):
        raise httpx.ConnectError("[Errno 111] Connection refused", request=request)

    path = tmp_path / "http_stress_test.log"
    with RunLog(path) as run_log:
        result = await _run(RequestConfig(address="http://unreachable.local:1", count=4), _handler, run_log)

    assert (result.successes, result.failures) == (0, 4)
    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 4
    assert all("ERROR] Sending request failed: ConnectError" in line for line in lines)


@pytest.mark.anyio
async def test_delay_sets_a_floor_on_elapsed_time():
    result = await _run(
        RequestConfig(address="target.local", count=3, delay_ms=100),
        lambda request: httpx.Response(200, request=request),
    )
    assert result.elapsed_ms >= 199
    assert result.total == 3


@pytest.mark.anyio
async def test_request_shape_matches_template():
    seen = []

    def _handler(request):
        seen.append((request.method, request.url.host, request.headers.get("x-api-key"), request.content))
        return httpx.Response(201, request=request)

    result = await _run(
        RequestConfig(
            address="api.local/items",
            method="put",
            headers=("X-Api-Key: secret",),
            body="{}",
            expected_status=201,
            count=6,
        ),
        _handler,
    )

    assert result.successes == 6
    assert set(seen) == {("PUT", "api.local", "secret", b"{}")}


@pytest.mark.anyio
async def test_invariant_holds_for_mixed_outcomes():
    statuses = itertools.cycle([200, 500, 200, 302, 200])

    def _handler(request):
        status = next(statuses)
        if status == 500:
            raise httpx.ReadTimeout("timed out", request=request)
        return httpx.Response(status, request=request)

    for count in (1, 7, 40):
        result = await _run(RequestConfig(address="t.local", count=count), _handler)
        assert result.successes + result.failures == count
