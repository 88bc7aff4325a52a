"""RPC-facing layer that validates requests and maps failures to status codes."""

from __future__ import annotations

import enum
from typing import Protocol

from gwexchanger.models import (
    CurrencyRequest,
    Empty,
    ExchangeRateResponse,
    ExchangeRatesResponse,
)


class StatusCode(enum.Enum):
    """RPC status codes used by the exchange server."""

    OK = 0
    INVALID_ARGUMENT = 3
    INTERNAL = 13


class RpcError(Exception):
    """An RPC failure carrying a status code and a description."""

    def __init__(self, code: StatusCode, details: str) -> None:
        super().__init__(f"rpc error: code = {code.name} desc = {details}")
        self.code = code
        self.details = details


class Exchange(Protocol):
    """The operations the server delegates to."""

    def get_exchange_rates(self, request: Empty) -> ExchangeRatesResponse: ...

    def get_exchange_rate_for_currency(
        self, request: CurrencyRequest
    ) -> ExchangeRateResponse: ...


class ExchangeServer:
    """Exchange service endpoints."""

    def __init__(self, exchange: Exchange) -> None:
        self._exchange = exchange

    def get_exchange_rates(self, request: Empty | None) -> ExchangeRatesResponse:
        """Return all exchange rates."""
        if request is None:
            raise RpcError(StatusCode.INVALID_ARGUMENT, "empty request")
        try:
            return self._exchange.get_exchange_rates(request)
        except Exception as exc:
            raise RpcError(StatusCode.INTERNAL, "failed to get exchange rates") from exc

    def get_exchange_rate_for_currency(
        self, request: CurrencyRequest
    ) -> ExchangeRateResponse:
        """Return the exchange rate for one pair of currencies."""
        if not request.from_currency or not request.to_currency:
            raise RpcError(StatusCode.INVALID_ARGUMENT, "empty request")
        try:
            return self._exchange.get_exchange_rate_for_currency(request)
        except Exception as exc:
            raise RpcError(
                StatusCode.INTERNAL, "failed to get exchange rate for currency"
            ) from exc