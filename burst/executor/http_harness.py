"""
burst/executor/http_harness.py

Purpose:
    The single place that puts a RequestTemplate on the wire.

Standards:
    - Single attempt: no retries, no backoff. What happens, is counted.
    - Unbounded pool: the burst decides concurrency, not the client.
    - Never raises: transport failures come back as Failed(...).
"""

from __future__ import annotations
import logging
from typing import Optional

import httpx

from burst.base.config import HttpConfig, get_config
from .harness import Harness
from .models import ExecutionOutcome, Failed, HttpMethod, RequestTemplate, Responded

log = logging.getLogger(__name__)


def describe_error(error: BaseException) -> str:
    message = str(error)
    if message:
        return f"{type(error).__name__}: {message}"
    return type(error).__name__


class HttpHarness(Harness):
    """
    httpx-backed harness. Owns its AsyncClient unless one is injected.
    """

    def __init__(self, client: Optional[httpx.AsyncClient] = None, settings: Optional[HttpConfig] = None):
        self.settings = settings or get_config().http
        self._owns_client = client is None
        self.client = client or self._build_client(self.settings)

    @staticmethod
    def _build_client(settings: HttpConfig) -> httpx.AsyncClient:
        # No connection cap: every launched execution gets its own connection
        limits = httpx.Limits(max_connections=None, max_keepalive_connections=None)
        return httpx.AsyncClient(
            limits=limits,
            headers={"User-Agent": settings.user_agent},
            follow_redirects=settings.follow_redirects,
            max_redirects=settings.max_redirects,
            verify=settings.verify_tls,
        )

    async def execute(self, template: RequestTemplate) -> ExecutionOutcome:
        try:
            response = await self.client.request(
                method=template.method.value,
                url=template.url,
                headers=dict(template.headers),
                content=template.body,
            )
        except httpx.RequestError as e:
            # Network level failure (DNS, connection refused, TLS, timeout)
            log.debug(f"Request to {template.url} failed: {e!r}")
            return Failed(describe_error(e))
        except Exception as e:
            log.error(f"Harness failure while requesting {template.url}: {e}", exc_info=True)
            return Failed(f"internal error: {describe_error(e)}")

        body = None if template.method is HttpMethod.HEAD else response.text
        return Responded(
            status_code=response.status_code,
            reason=response.reason_phrase,
            body=body,
        )

    async def aclose(self) -> None:
        if self._owns_client and not self.client.is_closed:
            await self.client.aclose()
            log.debug("HttpHarness client closed.")

    async def __aenter__(self) -> "HttpHarness":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
