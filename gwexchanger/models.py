"""Domain models and the request and response messages of the exchange service."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


@dataclass
class App:
    """A registered client application."""

    id: int
    name: str
    secret: str


@dataclass(frozen=True)
class CurrencyRequest:
    """A request for the rate between two currencies."""

    from_currency: str = ""
    to_currency: str = ""

    def to_dict(self) -> dict[str, str]:
        """Return the request as a JSON-ready mapping."""
        return {"from_currency": self.from_currency, "to_currency": self.to_currency}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CurrencyRequest:
        """Build a request from a mapping; missing keys become empty strings."""
        return cls(
            from_currency=str(data.get("from_currency", "")),
            to_currency=str(data.get("to_currency", "")),
        )


@dataclass(frozen=True)
class Empty:
    """A request that carries no data."""


@dataclass
class ExchangeRatesResponse:
    """All known rates, keyed by the two currency codes joined together."""

    rates: dict[str, float] = field(default_factory=dict)


@dataclass
class ExchangeRateResponse:
    """A single exchange rate."""

    rate: float = 0.0