"""Base HTTP client with redirect guard and response-shape validation."""

import asyncio
import re
from typing import Any, TypeVar
from urllib.parse import urljoin, urlsplit

import httpx
from loguru import logger
from pydantic import BaseModel, ValidationError

from settings import API_TIMEOUT, MAX_REDIRECTS, USER_AGENT
from source_client.errors import (
    MalformedResponse,
    SessionUnavailable,
    SourceConnectionError,
    SourceHTTPError,
    SourceTimeout,
    TooManyRedirects,
    UnexpectedContentType,
)
from source_client.rate_limit import MinIntervalGate

ModelT = TypeVar("ModelT", bound=BaseModel)

MARKUP_PREFIXES = ("<!", "<html", "<?xml")


def looks_like_markup(body: str) -> bool:
    """Check if a payload is an HTML/XML page rather than JSON."""
    return body.lstrip()[:8].lower().startswith(MARKUP_PREFIXES)


def redirect_allowed(location: str, expect: re.Pattern | None) -> bool:
    """A redirect is followed only if it stays on the expected endpoint shape."""
    if expect is None:
        return True
    path = urlsplit(location).path
    return "/archives/" not in path and expect.search(path) is not None


class BaseClient:
    """Base async HTTP client.

    Redirects are followed by hand so each hop can be checked against the
    endpoint shape. Every request is bounded by a wall-clock timeout and is
    never retried here; retry policy belongs to the caller.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = API_TIMEOUT,
        max_redirects: int = MAX_REDIRECTS,
        gate: MinIntervalGate | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._max_redirects = max_redirects
        self._gate = gate
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._request_count = 0
        logger.info("{}: base_url={}, timeout={}s", self.__class__.__name__, self.base_url, timeout)

    async def __aenter__(self):
        self._client = httpx.AsyncClient(
            timeout=self._timeout,
            follow_redirects=False,
            headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
            limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *_):
        logger.info("Total API requests: {}", self._request_count)
        if self._client:
            await self._client.aclose()

    @property
    def request_count(self) -> int:
        return self._request_count

    async def _send(self, url: str, params: dict | None) -> httpx.Response:
        """Single GET bounded by the wall-clock timeout."""
        if self._gate is not None:
            await self._gate.acquire()
        self._request_count += 1
        try:
            return await asyncio.wait_for(self._client.get(url, params=params), timeout=self._timeout)
        except (TimeoutError, httpx.TimeoutException) as e:
            raise SourceTimeout(url, self._timeout) from e
        except httpx.TransportError as e:
            raise SourceConnectionError(url, str(e) or e.__class__.__name__) from e

    async def _get(self, url: str, params: dict | None = None, expect: re.Pattern | None = None) -> Any:
        """GET JSON, following at most ``max_redirects`` guarded redirects."""
        requested = url
        redirects = 0
        while True:
            resp = await self._send(url, params)
            if not resp.is_redirect:
                break
            location = urljoin(str(resp.url), resp.headers["location"])
            if not redirect_allowed(location, expect):
                logger.warning("Redirect off endpoint: {} -> {}", requested, location)
                raise SessionUnavailable(requested, location)
            redirects += 1
            if redirects > self._max_redirects:
                raise TooManyRedirects(requested, self._max_redirects)
            logger.debug("Redirect {}: {}", redirects, location)
            url, params = location, None

        if not resp.is_success:
            raise SourceHTTPError(url, resp.status_code)

        body = resp.text
        if looks_like_markup(body):
            raise UnexpectedContentType(url)
        try:
            return resp.json()
        except ValueError as e:
            raise MalformedResponse(url, f"invalid JSON ({e})") from e

    @staticmethod
    def _parse(model: type[ModelT], data: Any, url: str) -> ModelT:
        """Validate a decoded payload against its schema."""
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise MalformedResponse(url, f"{e.error_count()} validation error(s)") from e
