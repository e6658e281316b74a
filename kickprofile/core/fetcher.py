"""httpx-based JSON fetcher with bounded manual redirects."""

import json
from typing import Any

import httpx

from kickprofile.config import DEFAULT_USER_AGENT
from kickprofile.exceptions import FetchTimeoutError, HttpStatusError, NetworkError, ParseError
from kickprofile.logging import get_logger

DEFAULT_TIMEOUT_MS = 12000
DEFAULT_MAX_REDIRECTS = 3
SNIPPET_LENGTH = 300

DEFAULT_HEADERS = {
    "User-Agent": DEFAULT_USER_AGENT,
    "Accept": "application/json,text/plain,*/*",
}

_log = get_logger("fetcher")


async def fetch_json(
    url: str,
    headers: dict[str, str] | None = None,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    max_redirects: int = DEFAULT_MAX_REDIRECTS,
    client: httpx.AsyncClient | None = None,
) -> Any:
    """
    GET a URL and decode its JSON body.

    Args:
        url: Absolute URL to request
        headers: Extra headers, override the browser-like defaults
        timeout_ms: Per-request timeout in milliseconds
        max_redirects: Number of 3xx hops to follow
        client: Shared AsyncClient; a short-lived one is used if None

    Returns:
        Decoded JSON value

    Raises:
        NetworkError: Connection-level failure
        FetchTimeoutError: Request exceeded timeout_ms
        HttpStatusError: Final response was not 2xx
        ParseError: Body was not valid JSON
    """
    request_headers = {**DEFAULT_HEADERS, **(headers or {})}

    if client is None:
        async with httpx.AsyncClient() as own_client:
            return await _fetch(own_client, url, request_headers, timeout_ms, max_redirects)
    return await _fetch(client, url, request_headers, timeout_ms, max_redirects)


async def _fetch(
    client: httpx.AsyncClient,
    url: str,
    headers: dict[str, str],
    timeout_ms: int,
    redirects_left: int,
) -> Any:
    timeout = httpx.Timeout(timeout_ms / 1000)
    current = url

    while True:
        try:
            response = await client.get(
                current,
                headers=headers,
                timeout=timeout,
                follow_redirects=False,
            )
        except httpx.TimeoutException as e:
            raise FetchTimeoutError(f"Timeout after {timeout_ms}ms for {current}") from e
        except (httpx.RequestError, httpx.InvalidURL) as e:
            raise NetworkError(f"Network error for {current}: {e}") from e

        status = response.status_code
        location = response.headers.get("location")

        if 300 <= status < 400 and location and redirects_left > 0:
            try:
                next_url = str(httpx.URL(current).join(location))
            except httpx.InvalidURL as e:
                raise NetworkError(f"Bad redirect location from {current}: {location!r}") from e
            _log.debug("redirect", status=status, url=current, location=next_url)
            current = next_url
            redirects_left -= 1
            continue

        body = response.text
        if not 200 <= status < 300:
            raise HttpStatusError(
                f"HTTP {status} for {current} :: {body[:SNIPPET_LENGTH]}",
                status_code=status,
            )

        try:
            return json.loads(body)
        except ValueError as e:
            raise ParseError(f"Bad JSON from {current} :: {body[:SNIPPET_LENGTH]}") from e
