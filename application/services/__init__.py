from .throttle import can_refresh, seconds_until_next_refresh
from .formatting import RateRow, currency_label, describe_rate, last_update_description
from .refresh_controller import RateRefreshController

__all__ = [
	'RateRefreshController',
	'RateRow',
	'can_refresh',
	'currency_label',
	'describe_rate',
	'last_update_description',
	'seconds_until_next_refresh',
]
