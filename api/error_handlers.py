import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from domain.exceptions.currency import ServiceNotReadyError

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
	@app.exception_handler(ServiceNotReadyError)
	async def service_not_ready_handler(request: Request, exc: ServiceNotReadyError):
		logger.error(f'Service not ready: {exc}')
		return JSONResponse(
			status_code=503, content={'detail': 'Exchange rate service unavailable'}
		)
