import logging

from application.services import RateRefreshController
from config.settings import get_settings
from domain.exceptions.currency import ServiceNotReadyError
from infrastructure.providers import ExchangeRateProvider, MonobankProvider

logger = logging.getLogger(__name__)


class AppDependencies:
	"""Container for application-wide singleton dependencies."""

	provider: ExchangeRateProvider | None = None
	controller: RateRefreshController | None = None


deps = AppDependencies()


def init_dependencies() -> None:
	"""Initialize all singleton dependencies. Called at app startup."""
	logger.info('Initializing dependencies...')
	settings = get_settings()

	deps.provider = MonobankProvider(
		timeout=settings.REQUEST_TIMEOUT_SECONDS,
		url=settings.MONOBANK_URL,
	)
	deps.controller = RateRefreshController(
		provider=deps.provider,
		interval_seconds=settings.REFRESH_INTERVAL_SECONDS,
	)
	logger.info('Dependencies initialized')


async def cleanup_dependencies() -> None:
	logger.info('Cleaning up dependencies...')

	if deps.controller:
		deps.controller.dispose()
	if deps.provider:
		await deps.provider.close()

	logger.info('Cleanup complete')


def get_controller() -> RateRefreshController:
	if deps.controller is None:
		raise ServiceNotReadyError('Refresh controller not initialized')
	return deps.controller
