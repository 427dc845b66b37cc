"""Remote data fetcher.

Responsibility:
- Resolve and check the configured API URL (absolute, https only).
- Issue a single GET and read the full body.
- Decode JSON and hand the payload to the shape rules in the domain.

No retries: the first failure is the answer.
"""

from __future__ import annotations

import json
import logging
from urllib.parse import urlsplit

import httpx

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.validation import extract_fetched_value
from core.errors import ConfigError, ParseError, TransportError


logger = logging.getLogger(__name__)

SECURE_SCHEME = "https"


def resolve_api_url(raw_url: str) -> str:
    """Return the API URL if it is an absolute https URL, else raise `ConfigError`.

    Any `scheme:` prefix other than https is reported as insecure, even when the
    rest is not a network URL (`mailto:x`, `localhost:8080`). The authority-less
    form `https:host/path` is read as `https://host/path`, as browsers do.
    """

    candidate = raw_url.strip()
    try:
        parts = urlsplit(candidate)
    except ValueError as exc:
        raise ConfigError("Invalid API_URL") from exc
    if not parts.scheme:
        raise ConfigError("Invalid API_URL")
    if parts.scheme.lower() != SECURE_SCHEME:
        raise ConfigError("Insecure protocol: API URL must use HTTPS")

    if not parts.netloc:
        rest = candidate.split(":", 1)[1].lstrip("/\\")
        candidate = f"{SECURE_SCHEME}://{rest}"

    try:
        parts = urlsplit(candidate)
        # Accessing .port validates the port component.
        _ = parts.port
    except ValueError as exc:
        raise ConfigError("Invalid API_URL") from exc
    if not parts.hostname:
        raise ConfigError("Invalid API_URL")
    return candidate


def _reject_constant(name: str) -> object:
    # NaN and Infinity are not JSON.
    raise ValueError(f"Non-standard JSON constant: {name}")


class RemoteFetcher:
    """Fetches one value from the configured JSON endpoint."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    async def fetch(self) -> str:
        url = resolve_api_url(self._settings.api_url)

        try:
            async with build_async_client(self._settings, transport=self._transport) as client:
                resp = await client.get(url)
        except httpx.RequestError as exc:
            raise TransportError(f"Request to API failed: {exc}") from exc

        if resp.is_error or resp.is_redirect:
            logger.warning("API responded with HTTP %s", resp.status_code)

        try:
            payload = json.loads(resp.text, parse_constant=_reject_constant)
        except (ValueError, RecursionError) as exc:
            raise ParseError("Failed to parse API response as JSON") from exc

        return extract_fetched_value(payload)
