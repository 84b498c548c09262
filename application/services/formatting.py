from dataclasses import dataclass
from datetime import datetime

from domain.models.currency import BuySellQuote, CrossQuote, ExchangeRate

CURRENCY_LABELS: dict[int, str] = {
	840: 'USD',
	978: 'EUR',
	980: 'UAH',
	826: 'GBP',
	392: 'JPY',
	756: 'CHF',
	985: 'PLN',
}


@dataclass(frozen=True)
class RateRow:
	title: str
	badge: str
	lines: tuple[str, ...] = ()


def currency_label(code: int) -> str:
	return CURRENCY_LABELS.get(code, str(code))


def last_update_description(now: datetime, fetched_at: datetime | None) -> str:
	if fetched_at is None:
		return ''

	elapsed = now - fetched_at
	minutes = int(elapsed.total_seconds() // 60)
	if minutes < 1:
		return 'updated just now'
	if minutes < 60:
		return f'updated {minutes} minutes ago'
	return f'updated {minutes // 60} hours ago'


def describe_rate(rate: ExchangeRate) -> RateRow:
	"""Build the display row for one pair: cross rate to 4 places, buy/sell to 2."""
	label_a = currency_label(rate.currency_code_a)
	label_b = currency_label(rate.currency_code_b)

	lines: list[str] = []
	quote = rate.quote
	if isinstance(quote, CrossQuote):
		lines.append(f'cross: {quote.cross:.4f}')
	elif isinstance(quote, BuySellQuote):
		if quote.buy is not None:
			lines.append(f'buy: {quote.buy:.2f}')
		if quote.sell is not None:
			lines.append(f'sell: {quote.sell:.2f}')

	return RateRow(title=f'{label_a} → {label_b}', badge=label_a[:1], lines=tuple(lines))
