"""A small client for the Open Exchange Rates API.

This module exposes :class:`OpenExchangeRatesClient`, which wraps the four
read-only endpoints of https://openexchangerates.org:

* ``latest.json`` - the most recent rates snapshot.
* ``historical/<YYYY-MM-DD>.json`` - the snapshot published for a day.
* ``currencies.json`` - every supported currency code with its name.
* ``usage.json`` - request statistics for the calling App ID.

Each call issues exactly one GET request and returns a typed record from
:mod:`open_exchange_rates.models`.  Nothing is cached and nothing is retried;
failures propagate as :class:`~open_exchange_rates.errors.ExchangeRateAPIError`
subclasses that keep the underlying exception.
"""

from __future__ import annotations

import datetime as _dt
import json
import logging
import os
from typing import Any, Callable, Optional, Tuple, TypeVar, Union
from urllib.parse import urlencode

import requests

from .errors import HTTPStatusError, ResponseReadError, TransportError
from .models import (
    Currencies,
    ExchangeRate,
    Usage,
    decode_currencies,
    decode_exchange_rate,
    decode_usage,
)

logger = logging.getLogger(__name__)

API_BASE_URL = "https://openexchangerates.org/api"
LATEST_ENDPOINT = "latest.json"
HISTORICAL_ENDPOINT = "historical/{date}.json"
CURRENCIES_ENDPOINT = "currencies.json"
USAGE_ENDPOINT = "usage.json"

#: Environment variable read by :meth:`OpenExchangeRatesClient.from_env`.
APP_ID_ENV_VAR = "OPENEXCHANGERATES_APP_ID"

T = TypeVar("T")
Timeout = Union[None, float, Tuple[float, float]]


class OpenExchangeRatesClient:
    """Client for the Open Exchange Rates REST API.

    Parameters
    ----------
    app_id : str
        The App ID issued by Open Exchange Rates.  Sent as the ``app_id``
        query parameter on every request.
    session : requests.Session, optional
        The HTTP transport to use.  When omitted the client creates its own
        session and closes it in :meth:`close`; an injected session is left
        for the caller to close.
    timeout : float or tuple, optional
        Passed straight to :meth:`requests.Session.get`.  Defaults to
        ``None``, i.e. the client imposes no timeout of its own.
    base_url : str, optional
        Root of the API.  Defaults to :data:`API_BASE_URL`.

    Examples
    --------
    >>> with OpenExchangeRatesClient("my-app-id") as client:
    ...     snapshot = client.latest()
    ...     snapshot.rate("EUR")
    """

    def __init__(
        self,
        app_id: str,
        session: Optional[requests.Session] = None,
        timeout: Timeout = None,
        base_url: str = API_BASE_URL,
    ) -> None:
        if not app_id:
            raise ValueError("app_id must be provided")
        self.app_id = app_id
        self.timeout = timeout
        self.base_url = base_url.rstrip("/")
        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()

    @classmethod
    def from_env(cls, **kwargs: Any) -> "OpenExchangeRatesClient":
        """Build a client whose App ID comes from ``OPENEXCHANGERATES_APP_ID``.

        Keyword arguments are forwarded to the constructor.
        """
        app_id = os.environ.get(APP_ID_ENV_VAR, "")
        if not app_id:
            raise ValueError(f"{APP_ID_ENV_VAR} environment variable not set")
        return cls(app_id, **kwargs)

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------
    def latest(self) -> ExchangeRate:
        """Get the latest exchange rates.

        See https://docs.openexchangerates.org/reference/latest-json.
        """
        return self._fetch(LATEST_ENDPOINT, decode_exchange_rate)

    def historical(self, date: Union[str, _dt.date]) -> ExchangeRate:
        """Get the exchange rates published for ``date``.

        Parameters
        ----------
        date : str or datetime.date
            The day to fetch.  A string must be in ``YYYY-MM-DD`` format; a
            :class:`datetime.datetime` is reduced to its date.

        Notes
        -----
        Whether the API holds data for the date is only known to the
        server; an unsupported date is reported through the response.
        """
        day = self._parse_date(date)
        endpoint = HISTORICAL_ENDPOINT.format(date=format_date(day))
        return self._fetch(endpoint, decode_exchange_rate)

    def currencies(self) -> Currencies:
        """Get the supported currency codes mapped to their names."""
        return self._fetch(CURRENCIES_ENDPOINT, decode_currencies)

    def usage(self) -> Usage:
        """Get plan and request statistics for the App ID."""
        return self._fetch(USAGE_ENDPOINT, decode_usage)

    def build_url(self, endpoint: str) -> str:
        """Return the absolute URL for ``endpoint``, App ID included."""
        return f"{self.base_url}/{endpoint}?{urlencode({'app_id': self.app_id})}"

    def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> "OpenExchangeRatesClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Internal helper methods
    # ------------------------------------------------------------------
    def _parse_date(self, value: Union[str, _dt.date]) -> _dt.date:
        if isinstance(value, _dt.datetime):
            return value.date()
        if isinstance(value, _dt.date):
            return value
        try:
            return _dt.datetime.strptime(value, "%Y-%m-%d").date()
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Invalid date '{value}'. Expected YYYY-MM-DD.") from exc

    def _fetch(self, endpoint: str, decode: Callable[[bytes], T]) -> T:
        """GET ``endpoint``, check the status and decode the body."""
        logger.debug("GET %s/%s", self.base_url, endpoint)
        try:
            response = self._session.get(self.build_url(endpoint), timeout=self.timeout, stream=True)
        except requests.RequestException as exc:
            raise TransportError(f"request for {endpoint} failed: {exc}", exc) from exc

        try:
            body = response.content
        except (requests.RequestException, OSError) as exc:
            raise ResponseReadError(f"reading {endpoint} response failed: {exc}", exc) from exc
        finally:
            response.close()

        logger.debug("%s answered %s with %d bytes", endpoint, response.status_code, len(body))
        if not 200 <= response.status_code < 300:
            raise self._status_error(endpoint, response.status_code, body)
        return decode(body)

    def _status_error(self, endpoint: str, status_code: int, body: bytes) -> HTTPStatusError:
        api_message = description = None
        try:
            payload = json.loads(body)
        except ValueError:
            payload = None
        if isinstance(payload, dict):
            api_message = payload.get("message")
            description = payload.get("description")

        detail = description or api_message or body[:200].decode("utf-8", errors="replace")
        logger.warning("HTTP %d while fetching %s: %s", status_code, endpoint, detail)
        return HTTPStatusError(
            f"HTTP {status_code} while fetching {endpoint}: {detail}",
            status_code,
            api_message=api_message,
            description=description,
        )


def format_date(day: _dt.date) -> str:
    """Format ``day`` as zero padded ``YYYY-MM-DD``."""
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"
