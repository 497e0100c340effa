"""Remote source clients package."""

from source_client.ballots import BallotsClient
from source_client.base import BaseClient, looks_like_markup
from source_client.errors import (
    MalformedResponse,
    SessionUnavailable,
    SourceConnectionError,
    SourceError,
    SourceHTTPError,
    SourceTimeout,
    TooManyRedirects,
    UnexpectedContentType,
    is_retryable,
)
from source_client.graph import GraphClient
from source_client.rate_limit import MinIntervalGate

__all__ = [
    # Base
    "BaseClient",
    "MinIntervalGate",
    "looks_like_markup",
    # Clients
    "BallotsClient",
    "GraphClient",
    # Errors
    "SourceError",
    "SessionUnavailable",
    "UnexpectedContentType",
    "SourceTimeout",
    "SourceHTTPError",
    "SourceConnectionError",
    "TooManyRedirects",
    "MalformedResponse",
    "is_retryable",
]
