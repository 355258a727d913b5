"""Pytest configuration for burstforge."""
import httpx
import pytest

from burst.base.config import BurstConfig, LogConfig, set_config


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def test_config(tmp_path):
    # No countdown in tests, and the run log never lands in the working directory.
    config = BurstConfig(
        log=LogConfig(run_log_file=str(tmp_path / "http_stress_test.log")),
        countdown_seconds=0,
    )
    set_config(config)
    yield config
    set_config(None)


@pytest.fixture
def mock_client_factory():
    """Build AsyncClients whose requests are answered by a handler instead of the network."""
    def _factory(handler):
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _factory
