from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class RateRowResponse(BaseModel):
	title: str = Field(..., description='Pair label, e.g. "USD → UAH"')
	badge: str = Field(..., description='First letter of the quoted currency')
	lines: list[str] = Field(default_factory=list, description='Formatted rate lines')
	currency_code_a: int = Field(..., description='ISO 4217 numeric code of the quoted currency')
	currency_code_b: int = Field(..., description='ISO 4217 numeric code of the base currency')
	rate_buy: float | None = None
	rate_sell: float | None = None
	rate_cross: float | None = None
	quoted_at: datetime | None = Field(None, description='When the provider quoted the pair')


class RatesSnapshotResponse(BaseModel):
	status: Literal['loading', 'error', 'loaded']
	error: str | None = Field(None, description='Error message when status is "error"')
	rows: list[RateRowResponse] = Field(default_factory=list)
	fetched_at: datetime | None = Field(None, description='Last successful fetch')
	last_update: str = Field('', description='Human readable age of the rates')
	can_refresh: bool
	seconds_until_next_refresh: int

	model_config = ConfigDict(
		json_schema_extra={
			'example': {
				'status': 'loaded',
				'error': None,
				'rows': [
					{
						'title': 'USD → UAH',
						'badge': 'U',
						'lines': ['buy: 41.00', 'sell: 41.50'],
						'currency_code_a': 840,
						'currency_code_b': 980,
						'rate_buy': 41.0,
						'rate_sell': 41.5,
						'rate_cross': None,
						'quoted_at': '2025-09-27T10:30:00Z',
					}
				],
				'fetched_at': '2025-09-27T10:31:00Z',
				'last_update': 'updated just now',
				'can_refresh': False,
				'seconds_until_next_refresh': 287,
			}
		}
	)


class RefreshResponse(RatesSnapshotResponse):
	notice: str | None = Field(None, description='Set when the refresh was throttled locally')


class HealthResponse(BaseModel):
	status: str = 'ok'
