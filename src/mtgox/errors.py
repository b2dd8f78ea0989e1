from __future__ import annotations
from typing import Any, Mapping, Optional


class MtGoxError(Exception):
    """Base class for everything this package raises on purpose."""


class ParseError(MtGoxError, ValueError):
    """A numeric or date field in a response payload could not be parsed."""

    def __init__(self, field: str, value: Any, reason: str = "not a number"):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"cannot parse {field}={value!r}: {reason}")


class EmptyBookError(MtGoxError, LookupError):
    def __init__(self, side: str, currency: str):
        self.side = side
        self.currency = currency
        super().__init__(f"no {side} in the {currency} order book")


class NotFound(MtGoxError):
    """404-equivalent failure, raised both locally and for HTTP 404 responses."""

    status = 404

    def __init__(
        self,
        body: str = "Not found.",
        headers: Optional[Mapping[str, str]] = None,
    ):
        self.body = body
        self.headers = dict(headers or {})
        super().__init__(body)


class TransportError(MtGoxError):
    """Network, protocol or HTTP-level failure talking to the exchange."""


class HTTPStatusError(TransportError):
    def __init__(self, status: int, body: str = ""):
        self.status = status
        self.body = body
        super().__init__(f"HTTP {status}: {body[:200]}")


class RemoteError(MtGoxError):
    """The exchange answered, but its payload reports a failure."""


class UnauthorizedError(RemoteError):
    pass


class MysqlError(RemoteError):
    pass
