from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from domain.models.currency import BuySellQuote, CrossQuote, ExchangeRate


class MonobankRatePayload(BaseModel):
	"""One record of the public /bank/currency response"""

	currency_code_a: int = Field(..., alias='currencyCodeA')
	currency_code_b: int = Field(..., alias='currencyCodeB')
	date: int | None = Field(None, description='Unix time of the quote')
	rate_buy: float | None = Field(None, alias='rateBuy')
	rate_sell: float | None = Field(None, alias='rateSell')
	rate_cross: float | None = Field(None, alias='rateCross')

	model_config = ConfigDict(populate_by_name=True, extra='ignore')

	def to_domain(self) -> ExchangeRate:
		if self.rate_cross is not None:
			quote = CrossQuote(cross=self.rate_cross)
		elif self.rate_buy is not None or self.rate_sell is not None:
			quote = BuySellQuote(buy=self.rate_buy, sell=self.rate_sell)
		else:
			quote = None

		quoted_at = datetime.fromtimestamp(self.date, tz=UTC) if self.date is not None else None

		return ExchangeRate(
			currency_code_a=self.currency_code_a,
			currency_code_b=self.currency_code_b,
			quote=quote,
			quoted_at=quoted_at,
		)


MonobankRatesAdapter = TypeAdapter(list[MonobankRatePayload])
