import logging

import httpx
from pydantic import ValidationError

from domain.exceptions.currency import (
	HttpStatusError,
	RateLimitedError,
	ResponseParseError,
	TransportError,
)
from domain.models.currency import ExchangeRate
from infrastructure.providers.base import ExchangeRateProvider
from infrastructure.providers.schemas import MonobankRatesAdapter

logger = logging.getLogger(__name__)


class MonobankProvider(ExchangeRateProvider):
	BASE_URL = 'https://api.monobank.ua/bank/currency'

	def __init__(
		self,
		client: httpx.AsyncClient | None = None,
		timeout: float = 10.0,
		url: str | None = None,
	):
		self.url = url or self.BASE_URL
		self._client = client or httpx.AsyncClient(
			timeout=httpx.Timeout(timeout),
			headers={'accept': 'application/json'},
		)

	@property
	def name(self) -> str:
		return 'monobank'

	async def _request(self) -> list:
		try:
			response = await self._client.get(self.url)
		except httpx.RequestError as e:
			detail = str(e) or e.__class__.__name__
			logger.error(f'Monobank request failed: {e.__class__.__name__}: {detail}')
			raise TransportError(detail) from e

		if response.status_code == 429:
			logger.warning('Monobank rejected the request with 429')
			raise RateLimitedError()
		if response.status_code != 200:
			logger.error(f'Monobank HTTP error {response.status_code}: {response.text[:200]}')
			raise HttpStatusError(response.status_code)

		try:
			return response.json()
		except ValueError as e:
			logger.error(f'Monobank returned invalid JSON: {e}')
			raise ResponseParseError(f'invalid JSON: {e}') from e

	async def fetch_rates(self) -> list[ExchangeRate]:
		data = await self._request()
		try:
			payloads = MonobankRatesAdapter.validate_python(data)
		except ValidationError as e:
			logger.error(f'Monobank response parsing error: {e.error_count()} errors')
			raise ResponseParseError(f'unexpected response shape: {e.errors()[0]["msg"]}') from e

		rates = [payload.to_domain() for payload in payloads]
		logger.info(f'{self.name} returned {len(rates)} rates')
		return rates

	async def close(self) -> None:
		await self._client.aclose()
