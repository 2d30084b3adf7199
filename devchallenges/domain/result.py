"""Explicit outcome of a fetch against GitHub."""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")

NO_TOKEN = "No token configured"
GITHUB_API_ERROR = "GitHub API error"
GRAPHQL_ERROR = "GraphQL error"
SERVER_ERROR = "Server error"


class FetchStatus(str, Enum):
    SUCCESS = "success"
    # Feature disabled, e.g. no GitHub token configured
    EMPTY = "empty"
    # GitHub answered with a non-2xx status or a GraphQL errors array
    ERROR = "error"
    # Unexpected local failure (network, parsing)
    FAILED = "failed"


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """
    Result of a soft-failing fetch.

    ``data`` always holds a usable fallback (empty list or None) when the
    fetch did not succeed, so callers can render it unconditionally.
    """

    status: FetchStatus
    data: T
    error: Optional[str] = None

    @classmethod
    def success(cls, data: T) -> "FetchResult[T]":
        return cls(FetchStatus.SUCCESS, data)

    @classmethod
    def empty(cls, data: T, error: str = NO_TOKEN) -> "FetchResult[T]":
        return cls(FetchStatus.EMPTY, data, error)

    @classmethod
    def upstream_error(cls, data: T, error: str) -> "FetchResult[T]":
        return cls(FetchStatus.ERROR, data, error)

    @classmethod
    def failed(cls, data: T, error: str = SERVER_ERROR) -> "FetchResult[T]":
        return cls(FetchStatus.FAILED, data, error)

    @property
    def ok(self) -> bool:
        return self.status is FetchStatus.SUCCESS
