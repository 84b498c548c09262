from dataclasses import dataclass
from datetime import datetime
from enum import Enum


@dataclass(frozen=True)
class BuySellQuote:
    buy: float | None
    sell: float | None


@dataclass(frozen=True)
class CrossQuote:
    cross: float


Quote = BuySellQuote | CrossQuote


@dataclass(frozen=True)
class ExchangeRate:
    """One currency pair snapshot from the provider"""
    currency_code_a: int
    currency_code_b: int
    quote: Quote | None
    quoted_at: datetime | None = None

    @property
    def rate_buy(self) -> float | None:
        return self.quote.buy if isinstance(self.quote, BuySellQuote) else None

    @property
    def rate_sell(self) -> float | None:
        return self.quote.sell if isinstance(self.quote, BuySellQuote) else None

    @property
    def rate_cross(self) -> float | None:
        return self.quote.cross if isinstance(self.quote, CrossQuote) else None


class ErrorKind(Enum):
    RATE_LIMITED = "rate_limited"
    HTTP = "http"
    TRANSPORT = "transport"


@dataclass(frozen=True)
class Loading:
    pass


@dataclass(frozen=True)
class Error:
    message: str
    kind: ErrorKind
    status_code: int | None = None


@dataclass(frozen=True)
class Loaded:
    rates: tuple[ExchangeRate, ...]
    fetched_at: datetime


RefreshState = Loading | Error | Loaded


@dataclass(frozen=True)
class ThrottleNotice:
    """Advisory emitted when a refresh is suppressed locally"""
    seconds_remaining: int
    interval_seconds: int = 300

    @property
    def message(self) -> str:
        return (
            f"rates refresh at most once every {self.interval_seconds // 60} minutes; "
            f"next refresh in {self.seconds_remaining} s"
        )


@dataclass(frozen=True)
class RefreshOutcome:
    state: RefreshState
    notice: ThrottleNotice | None = None
