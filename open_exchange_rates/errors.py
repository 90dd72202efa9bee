"""Exceptions raised by :class:`~open_exchange_rates.OpenExchangeRatesClient`.

Every failure surfaces as a subclass of :class:`ExchangeRateAPIError`.  The
subclass tells you *where* the request went wrong, and the original
exception is kept on :attr:`ExchangeRateAPIError.cause` (and chained as
``__cause__``) for diagnostics:

* :class:`TransportError` - the request never completed (DNS, refused
  connection, TLS, timeout).
* :class:`ResponseReadError` - the response started but its body could not
  be read.
* :class:`HTTPStatusError` - the server answered with a non-2xx status.
* :class:`DecodeError` - the body is not valid JSON or does not have the
  expected shape.
"""

from __future__ import annotations

from typing import Optional


class ExchangeRateAPIError(Exception):
    """Base class for all errors raised by the client."""

    kind = "api"
    label = "API"

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        return f"{self.label} error: {self.message}"


class TransportError(ExchangeRateAPIError):
    """The HTTP request could not be completed."""

    kind = "transport"
    label = "Transport"


class ResponseReadError(ExchangeRateAPIError):
    """Reading the response body failed part way."""

    kind = "io"
    label = "IO"


class DecodeError(ExchangeRateAPIError):
    """The response body is not JSON of the expected shape."""

    kind = "decode"
    label = "Decode"


class HTTPStatusError(ExchangeRateAPIError):
    """The API answered with a non-success HTTP status.

    Open Exchange Rates reports failures as a JSON document such as
    ``{"error": true, "status": 401, "message": "invalid_app_id",
    "description": "..."}``; when present, ``message`` and ``description``
    are copied onto the exception.
    """

    kind = "status"
    label = "HTTP status"

    def __init__(
        self,
        message: str,
        status_code: int,
        api_message: Optional[str] = None,
        description: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.api_message = api_message
        self.description = description
