"""Source adapter errors.

Every failure of a remote call surfaces as a ``SourceError`` subclass so the
orchestrator can decide per type whether it ends the run or a single item.
"""


class SourceError(Exception):
    """Base error for remote source calls."""

    def __init__(self, message: str = "Source request failed", url: str | None = None):
        self.message = message
        self.url = url
        super().__init__(self.message)


class SessionUnavailable(SourceError):
    """Provider redirected away from the dataset (archived or unpublished session)."""

    def __init__(self, url: str, location: str):
        self.location = location
        super().__init__(f"session not available (redirected to: {location})", url)


class UnexpectedContentType(SourceError):
    """Payload is markup instead of structured data."""

    def __init__(self, url: str):
        super().__init__(f"received markup instead of JSON from {url}", url)


class SourceTimeout(SourceError):
    """Request exceeded its wall-clock budget."""

    def __init__(self, url: str, timeout: float):
        self.timeout = timeout
        super().__init__(f"timeout after {timeout:g}s for {url}", url)


class SourceHTTPError(SourceError):
    """Non-2xx response."""

    def __init__(self, url: str, status_code: int):
        self.status_code = status_code
        super().__init__(f"HTTP {status_code} for {url}", url)


class SourceConnectionError(SourceError):
    """Network-level failure before a response arrived."""

    def __init__(self, url: str, detail: str):
        super().__init__(f"network error for {url}: {detail}", url)


class TooManyRedirects(SourceError):
    """Redirect chain longer than allowed."""

    def __init__(self, url: str, max_redirects: int):
        super().__init__(f"too many redirects (>{max_redirects}) for {url}", url)


class MalformedResponse(SourceError):
    """Payload is not valid JSON or does not match the expected shape."""

    def __init__(self, url: str, detail: str):
        super().__init__(f"malformed response from {url}: {detail}", url)


def is_retryable(exc: BaseException) -> bool:
    """Network errors, timeouts and 5xx responses are worth another attempt."""
    if isinstance(exc, (SourceTimeout, SourceConnectionError)):
        return True
    return isinstance(exc, SourceHTTPError) and exc.status_code >= 500
