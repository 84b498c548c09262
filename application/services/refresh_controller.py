import asyncio
import logging
from collections.abc import Callable
from datetime import UTC, datetime

from application.services import formatting, throttle
from domain.exceptions.currency import HttpStatusError, ProviderError, RateLimitedError
from domain.models.currency import (
	Error,
	ErrorKind,
	Loaded,
	Loading,
	RefreshOutcome,
	RefreshState,
	ThrottleNotice,
)
from infrastructure.providers.base import ExchangeRateProvider

logger = logging.getLogger(__name__)

StateListener = Callable[[RefreshState], None]
NoticeListener = Callable[[ThrottleNotice], None]


def utc_now() -> datetime:
	return datetime.now(UTC)


def _error_from(exc: ProviderError) -> Error:
	if isinstance(exc, RateLimitedError):
		return Error(message=str(exc), kind=ErrorKind.RATE_LIMITED, status_code=429)
	if isinstance(exc, HttpStatusError):
		return Error(message=str(exc), kind=ErrorKind.HTTP, status_code=exc.status_code)
	return Error(message=str(exc), kind=ErrorKind.TRANSPORT)


def _log_startup_failure(task: asyncio.Task) -> None:
	if task.cancelled():
		return
	exc = task.exception()
	if exc is not None:
		logger.error(f'Initial rates fetch failed: {exc}', exc_info=exc)


class RateRefreshController:
	"""
	Owns the fetch, the client-side throttle and the RefreshState machine.

	Loading -> Loaded | Error on completion, Loaded | Error -> Loading on the
	next accepted refresh. A throttled attempt leaves the state untouched and
	only emits a ThrottleNotice. The throttle clock advances only when a fetch
	completes and parses successfully.
	"""

	def __init__(
		self,
		provider: ExchangeRateProvider,
		interval_seconds: int = throttle.DEFAULT_INTERVAL_SECONDS,
		clock: Callable[[], datetime] = utc_now,
		on_notice: NoticeListener | None = None,
	):
		self.provider = provider
		self.interval_seconds = interval_seconds
		self._clock = clock

		self._state: RefreshState = Loading()
		self.last_fetched_at: datetime | None = None

		# Accepted refreshes run one at a time
		self._lock = asyncio.Lock()
		self._sequence = 0
		self._disposed = False
		self._startup_task: asyncio.Task | None = None

		self._listeners: list[StateListener] = []
		self._notice_listeners: list[NoticeListener] = []
		if on_notice is not None:
			self._notice_listeners.append(on_notice)

	@property
	def state(self) -> RefreshState:
		return self._state

	def add_listener(self, listener: StateListener) -> None:
		self._listeners.append(listener)

	def add_notice_listener(self, listener: NoticeListener) -> None:
		self._notice_listeners.append(listener)

	def can_refresh(self) -> bool:
		return throttle.can_refresh(self._clock(), self.last_fetched_at, self.interval_seconds)

	def seconds_until_next_refresh(self) -> int:
		return throttle.seconds_until_next_refresh(
			self._clock(), self.last_fetched_at, self.interval_seconds
		)

	@staticmethod
	def currency_label(code: int) -> str:
		return formatting.currency_label(code)

	def last_update_description(self) -> str:
		return formatting.last_update_description(self._clock(), self.last_fetched_at)

	def start(self) -> asyncio.Task:
		"""Issue the initial fetch. Must be called from a running event loop."""
		self._startup_task = asyncio.create_task(self.refresh())
		self._startup_task.add_done_callback(_log_startup_failure)
		return self._startup_task

	def dispose(self) -> None:
		self._disposed = True
		self._sequence += 1
		if self._startup_task is not None and not self._startup_task.done():
			self._startup_task.cancel()

	async def refresh(self) -> RefreshState:
		outcome = await self.attempt_refresh()
		return outcome.state

	async def attempt_refresh(self) -> RefreshOutcome:
		async with self._lock:
			if self._disposed:
				return RefreshOutcome(state=self._state)

			if not self.can_refresh():
				notice = ThrottleNotice(
					seconds_remaining=self.seconds_until_next_refresh(),
					interval_seconds=self.interval_seconds,
				)
				logger.info(f'Refresh throttled, {notice.seconds_remaining}s remaining')
				self._emit_notice(notice)
				return RefreshOutcome(state=self._state, notice=notice)

			self._sequence += 1
			sequence = self._sequence
			self._set_state(Loading())

			try:
				rates = await self.provider.fetch_rates()
			except ProviderError as e:
				next_state: RefreshState = _error_from(e)
			except Exception as e:
				logger.error(f'Unexpected error while fetching rates: {e}', exc_info=True)
				if sequence == self._sequence and not self._disposed:
					self._set_state(Error(message=f'connection failure: {e}', kind=ErrorKind.TRANSPORT))
				raise
			else:
				next_state = Loaded(rates=tuple(rates), fetched_at=self._clock())

			if sequence != self._sequence or self._disposed:
				logger.debug(f'Dropping completion of refresh #{sequence}, latest is #{self._sequence}')
				return RefreshOutcome(state=self._state)

			if isinstance(next_state, Loaded):
				self.last_fetched_at = next_state.fetched_at
			self._set_state(next_state)
			return RefreshOutcome(state=next_state)

	def _set_state(self, state: RefreshState) -> None:
		self._state = state
		if isinstance(state, Error):
			logger.warning(f'Refresh failed: {state.message}')
		elif isinstance(state, Loaded):
			logger.info(f'Loaded {len(state.rates)} rates from {self.provider.name}')
		for listener in self._listeners:
			listener(state)

	def _emit_notice(self, notice: ThrottleNotice) -> None:
		for listener in self._notice_listeners:
			listener(notice)
