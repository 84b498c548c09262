from datetime import datetime

DEFAULT_INTERVAL_SECONDS = 300


def _elapsed_seconds(now: datetime, last_fetched_at: datetime) -> int:
	# whole seconds, truncated
	return int((now - last_fetched_at).total_seconds())


def can_refresh(
	now: datetime,
	last_fetched_at: datetime | None,
	interval: int = DEFAULT_INTERVAL_SECONDS,
) -> bool:
	if last_fetched_at is None:
		return True
	return _elapsed_seconds(now, last_fetched_at) >= interval


def seconds_until_next_refresh(
	now: datetime,
	last_fetched_at: datetime | None,
	interval: int = DEFAULT_INTERVAL_SECONDS,
) -> int:
	"""Remaining wait for user-facing messages; can_refresh() makes the actual decision."""
	if last_fetched_at is None:
		return 0
	return max(interval - _elapsed_seconds(now, last_fetched_at), 0)
