"""Error kinds raised by the fetch and render layers.

Every failure of an in-flight fetch or render surfaces as a ``WattpadError``
subclass. Transport exceptions are translated at the Fetcher boundary; cache
failures never reach this module (see ``wattpadkit.cache``).
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

_MAX_BODY_PREVIEW = 500


class ErrorCode(StrEnum):
    NOT_FOUND = "NOT_FOUND"
    API_ERROR = "API_ERROR"
    NOT_JSON = "NOT_JSON"
    NETWORK_ERROR = "NETWORK_ERROR"
    EMPTY_BODY = "EMPTY_BODY"
    INVALID_LOCATION = "INVALID_LOCATION"
    INVALID_RESPONSE = "INVALID_RESPONSE"


class WattpadError(Exception):
    """Base class for all expected failure conditions.

    Callers decide whether to re-invoke; nothing in this package retries.
    """

    code: ErrorCode = ErrorCode.API_ERROR
    recoverable: bool = False

    def __init__(self, message: str, *, url: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.url = url

    def to_dict(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": str(self),
                "url": self.url,
                "recoverable": self.recoverable,
            }
        }


class NotFoundError(WattpadError):
    """The remote answered with HTTP 404."""

    code = ErrorCode.NOT_FOUND

    def __init__(self, url: str) -> None:
        super().__init__(f"HTTP 404: resource not found: {url}", url=url)


class ApiError(WattpadError):
    """Unsuccessful HTTP status, or an error envelope inside a JSON body."""

    code = ErrorCode.API_ERROR
    recoverable = True

    def __init__(self, message: str, *, url: str | None = None, payload: Any = None) -> None:
        super().__init__(message, url=url)
        self.payload = payload

    def __str__(self) -> str:
        if self.payload is None:
            return self.message
        return f"{self.message} (API response: {self.payload})"


class NotJsonError(WattpadError):
    """A structured fetch returned a body that is not a JSON object."""

    code = ErrorCode.NOT_JSON

    def __init__(self, message: str, *, url: str | None = None, body: str = "") -> None:
        super().__init__(message, url=url)
        self.body = body

    @property
    def truncated_body(self) -> str:
        if len(self.body) > _MAX_BODY_PREVIEW:
            return self.body[:_MAX_BODY_PREVIEW] + "..."
        return self.body

    def __str__(self) -> str:
        return f"{self.message}\nResponse body (truncated): {self.truncated_body}"


class NetworkError(WattpadError):
    """Transport-level failure: DNS, connect, read timeout, protocol error."""

    code = ErrorCode.NETWORK_ERROR
    recoverable = True


class EmptyBodyError(WattpadError):
    """A success status carried no body."""

    code = ErrorCode.EMPTY_BODY

    def __init__(self, url: str) -> None:
        super().__init__(f"Received empty response body for {url}", url=url)


class InvalidLocationError(WattpadError):
    """A part's text location is missing or cannot be made absolute."""

    code = ErrorCode.INVALID_LOCATION


class InvalidResponseError(WattpadError):
    """A JSON object was returned but lacks the expected record shape."""

    code = ErrorCode.INVALID_RESPONSE
