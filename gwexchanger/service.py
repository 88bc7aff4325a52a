"""Service layer that answers exchange-rate queries from storage."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from gwexchanger.errors import NotFoundError, StorageError
from gwexchanger.logs import err_attr
from gwexchanger.models import (
    CurrencyRequest,
    Empty,
    ExchangeRateResponse,
    ExchangeRatesResponse,
)


class ExchangeError(Exception):
    """Raised when the service cannot answer an exchange-rate query."""


class RatesStorage(Protocol):
    """What the service needs from a rate store."""

    def get_rate(self, from_currency: str, to_currency: str) -> float: ...

    def get_rates(self) -> dict[str, float]: ...


class ExchangeService:
    """Looks up exchange rates and wraps storage failures."""

    def __init__(
        self,
        log: logging.Logger,
        storage: RatesStorage,
        rate_provider: Any = None,
    ) -> None:
        self._log = log
        self._storage = storage
        self._rate_provider = rate_provider

    def _fail(self, op: str, what: str, err: StorageError) -> ExchangeError:
        if isinstance(err, NotFoundError):
            self._log.warning(f"{what} not found", extra=err_attr(err))
        else:
            self._log.error(f"failed to get {what}", extra=err_attr(err))
        return ExchangeError(f"{op}: {err}")

    def get_exchange_rates(self, request: Empty | None = None) -> ExchangeRatesResponse:
        """Return every known rate."""
        op = "exchanger.GetExchangeRates"
        try:
            rates = self._storage.get_rates()
        except StorageError as err:
            raise self._fail(op, "rates", err) from err
        return ExchangeRatesResponse(rates=rates)

    def get_exchange_rate_for_currency(
        self, request: CurrencyRequest
    ) -> ExchangeRateResponse:
        """Return the rate between the two currencies of ``request``."""
        op = "exchanger.GetExchangeRateForCurrency"
        if not request.from_currency or not request.to_currency:
            raise ExchangeError(f"{op}: from/to currency is empty")
        try:
            rate = self._storage.get_rate(request.from_currency, request.to_currency)
        except StorageError as err:
            raise self._fail(op, "rate", err) from err
        return ExchangeRateResponse(rate=rate)