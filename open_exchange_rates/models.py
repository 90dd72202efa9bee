"""Typed records for the Open Exchange Rates JSON documents.

The models are validated in pydantic's *strict* mode: a document either
matches the documented schema exactly (extra keys are ignored) or decoding
fails with :class:`~open_exchange_rates.errors.DecodeError`.  No field has a
default, so a missing key is always an error rather than a half-filled
record.

Records are frozen: attributes cannot be reassigned and
``ExchangeRate.rates`` is a read-only mapping.  Decoding only accepts the
wire names, so ``Features.time_series`` must arrive as ``"time-series"``.
"""

from __future__ import annotations

import datetime as _dt
from types import MappingProxyType
from typing import Dict, Mapping, Type, TypeVar, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_serializer,
    field_validator,
)

from .errors import DecodeError

Body = Union[str, bytes]
M = TypeVar("M", bound="_Record")

#: Mapping of currency code to its display name, as returned by
#: ``currencies.json``.
Currencies = Dict[str, str]

_currencies_adapter = TypeAdapter(Currencies)


class _Record(BaseModel):
    # Python field names are accepted when building records in code; the
    # decoders below only accept the wire names.
    model_config = ConfigDict(
        strict=True,
        frozen=True,
        validate_by_alias=True,
        validate_by_name=True,
    )

    def to_json(self) -> str:
        """Serialise back to the wire format (aliases included)."""
        return self.model_dump_json(by_alias=True)


class ExchangeRate(_Record):
    """Rates snapshot returned by ``latest.json`` and ``historical/*.json``."""

    disclaimer: str
    license: str
    timestamp: int
    base: str
    rates: Mapping[str, float]

    @field_validator("rates")
    @classmethod
    def _freeze_rates(cls, value: Mapping[str, float]) -> Mapping[str, float]:
        return MappingProxyType(dict(value))

    @field_serializer("rates")
    def _dump_rates(self, value: Mapping[str, float]) -> Dict[str, float]:
        return dict(value)

    @property
    def published_at(self) -> _dt.datetime:
        """The snapshot time as an aware UTC datetime."""
        return _dt.datetime.fromtimestamp(self.timestamp, tz=_dt.timezone.utc)

    def rate(self, code: str) -> float:
        """Return the rate for ``code`` (case-insensitive).

        Raises
        ------
        KeyError
            If the snapshot carries no rate for the currency.  Historical
            snapshots predate some currencies.
        """
        return self.rates[code.upper()]


class Features(_Record):
    base: bool
    symbols: bool
    experimental: bool
    time_series: bool = Field(alias="time-series")
    convert: bool


class UsageDataPlan(_Record):
    name: str
    quota: str
    update_frequency: str
    features: Features


class UsageDataUsage(_Record):
    requests: int
    requests_quota: int
    requests_remaining: int
    days_elapsed: int
    days_remaining: int
    daily_average: int


class UsageData(_Record):
    app_id: str
    status: str
    plan: UsageDataPlan
    usage: UsageDataUsage


class Usage(_Record):
    """Account statistics returned by ``usage.json``."""

    status: int
    data: UsageData


def _describe(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(item) for item in err["loc"]) or "<document>"
        parts.append(f"{location}: {err['msg']}")
    return "; ".join(parts)


def _decode_model(model: Type[M], body: Body) -> M:
    try:
        return model.model_validate_json(body, by_alias=True, by_name=False)
    except ValidationError as exc:
        raise DecodeError(f"invalid {model.__name__} document ({_describe(exc)})", exc) from exc


def decode_exchange_rate(body: Body) -> ExchangeRate:
    """Decode a ``latest.json`` or ``historical/<date>.json`` body."""
    return _decode_model(ExchangeRate, body)


def decode_usage(body: Body) -> Usage:
    """Decode a ``usage.json`` body."""
    return _decode_model(Usage, body)


def decode_currencies(body: Body) -> Currencies:
    """Decode a ``currencies.json`` body into a code -> name mapping."""
    try:
        return _currencies_adapter.validate_json(body, strict=True)
    except ValidationError as exc:
        raise DecodeError(f"invalid Currencies document ({_describe(exc)})", exc) from exc
