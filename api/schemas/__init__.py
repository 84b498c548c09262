from .responses import HealthResponse, RateRowResponse, RatesSnapshotResponse, RefreshResponse

__all__ = [
	'HealthResponse',
	'RateRowResponse',
	'RatesSnapshotResponse',
	'RefreshResponse',
]
