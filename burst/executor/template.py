"""
burst/executor/template.py

Purpose:
    Turns a RequestConfig into the RequestTemplate every execution shares.
    Pure: no I/O, no network. Anything wrong with the user's input surfaces
    here as ConfigError, before a single request goes out.
"""

from __future__ import annotations
import logging
import re
from types import MappingProxyType
from typing import Dict, Iterable

import httpx

from burst.errors import ConfigError, ErrorCode
from .models import RequestConfig, RequestTemplate

log = logging.getLogger(__name__)

_SCHEMES = ("http://", "https://")

# RFC 7230 token for names; visible ASCII, space and tab for values
_HEADER_NAME = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")
_HEADER_VALUE = re.compile(r"[\t\x20-\x7e]*")


def add_scheme_if_missing(address: str) -> str:
    """Addresses carrying http:// or https:// are kept verbatim; the rest get https://."""
    if address.startswith(_SCHEMES):
        return address
    return f"https://{address}"


def parse_header(header: str) -> tuple[str, str]:
    """
    Split a "key: value" string. Exactly one colon is accepted.
    """
    parts = header.strip().split(":")
    if len(parts) != 2:
        raise ConfigError(
            ErrorCode.CONFIG_MALFORMED_HEADER,
            f"Invalid header format: '{header}'. Expected 'key: value'",
            details={"header": header},
        )
    key, value = parts[0].strip(), parts[1].strip()
    if not key:
        raise ConfigError(
            ErrorCode.CONFIG_MALFORMED_HEADER,
            f"Invalid header format: '{header}'. Header name is empty",
            details={"header": header},
        )
    if not _HEADER_NAME.fullmatch(key):
        raise ConfigError(
            ErrorCode.CONFIG_MALFORMED_HEADER,
            f"Invalid header name: '{key}'",
            details={"header": header},
        )
    if not _HEADER_VALUE.fullmatch(value):
        raise ConfigError(
            ErrorCode.CONFIG_MALFORMED_HEADER,
            f"Invalid header value for '{key}': only printable ASCII is allowed",
            details={"header": header},
        )
    return key, value


def parse_headers(headers: Iterable[str]) -> Dict[str, str]:
    parsed: Dict[str, str] = {}
    for header in headers:
        key, value = parse_header(header)
        parsed[key] = value
    return parsed


def normalize_url(address: str) -> str:
    candidate = add_scheme_if_missing(address)
    try:
        url = httpx.URL(candidate)
    except (httpx.InvalidURL, TypeError, ValueError) as e:
        raise ConfigError(
            ErrorCode.CONFIG_INVALID_URL,
            f"Failed to build url: {e}",
            details={"address": address},
        ) from e

    if url.scheme not in ("http", "https") or not url.host:
        raise ConfigError(
            ErrorCode.CONFIG_INVALID_URL,
            f"Failed to build url: '{candidate}' is not an absolute http(s) URL",
            details={"address": address},
        )
    return candidate


def build(config: RequestConfig) -> RequestTemplate:
    """
    Validate the config and produce the shared request template.

    Raises:
        ConfigError: malformed header, unparseable URL, or a body on a
            method that does not carry one.
    """
    headers = parse_headers(config.headers)
    url = normalize_url(config.address)

    body = None
    if config.body is not None:
        if not config.method.allows_body:
            raise ConfigError(
                ErrorCode.CONFIG_BODY_NOT_ALLOWED,
                f"Body is not allowed for {config.method} requests",
                details={"method": config.method.value},
            )
        body = config.body.encode("utf-8")

    log.debug(f"Built template: {config.method} {url} ({len(headers)} headers)")
    return RequestTemplate(
        url=url,
        method=config.method,
        headers=MappingProxyType(headers),
        body=body,
    )
