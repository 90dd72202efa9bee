"""Top level package for the Open Exchange Rates client.

Importing from this module exposes the client, the response records and the
exceptions directly for convenience:

>>> from open_exchange_rates import OpenExchangeRatesClient
>>> client = OpenExchangeRatesClient(app_id="my-app-id")
>>> rates = client.historical("2013-02-16").rates

The client is implemented in :mod:`.api`, the records in :mod:`.models`.
"""

from .api import OpenExchangeRatesClient  # noqa: F401
from .errors import (  # noqa: F401
    DecodeError,
    ExchangeRateAPIError,
    HTTPStatusError,
    ResponseReadError,
    TransportError,
)
from .models import (  # noqa: F401
    Currencies,
    ExchangeRate,
    Features,
    Usage,
    UsageData,
    UsageDataPlan,
    UsageDataUsage,
)

__all__ = [
    "OpenExchangeRatesClient",
    "ExchangeRateAPIError",
    "TransportError",
    "ResponseReadError",
    "DecodeError",
    "HTTPStatusError",
    "ExchangeRate",
    "Currencies",
    "Usage",
    "UsageData",
    "UsageDataPlan",
    "UsageDataUsage",
    "Features",
]
