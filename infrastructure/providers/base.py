from abc import ABC, abstractmethod

from domain.models.currency import ExchangeRate


class ExchangeRateProvider(ABC):
	"""A source of exchange rate snapshots."""

	@property
	@abstractmethod
	def name(self) -> str:
		...

	@abstractmethod
	async def fetch_rates(self) -> list[ExchangeRate]:
		...

	@abstractmethod
	async def close(self) -> None:
		...
