from typing import Annotated

from fastapi import APIRouter, Depends, status

from api.dependencies import get_controller
from api.schemas import HealthResponse, RateRowResponse, RatesSnapshotResponse, RefreshResponse
from application.services import RateRefreshController, describe_rate
from domain.models.currency import Error, Loaded, RefreshState

router = APIRouter(prefix='/api', tags=['rates'])


def _status_of(state: RefreshState) -> str:
	if isinstance(state, Loaded):
		return 'loaded'
	if isinstance(state, Error):
		return 'error'
	return 'loading'


def build_snapshot(controller: RateRefreshController, state: RefreshState) -> dict:
	rows = []
	if isinstance(state, Loaded):
		for rate in state.rates:
			row = describe_rate(rate)
			rows.append(
				RateRowResponse(
					title=row.title,
					badge=row.badge,
					lines=row.lines,
					currency_code_a=rate.currency_code_a,
					currency_code_b=rate.currency_code_b,
					rate_buy=rate.rate_buy,
					rate_sell=rate.rate_sell,
					rate_cross=rate.rate_cross,
					quoted_at=rate.quoted_at,
				)
			)

	return {
		'status': _status_of(state),
		'error': state.message if isinstance(state, Error) else None,
		'rows': rows,
		'fetched_at': controller.last_fetched_at,
		'last_update': controller.last_update_description(),
		'can_refresh': controller.can_refresh(),
		'seconds_until_next_refresh': controller.seconds_until_next_refresh(),
	}


@router.get(
	'/rates',
	response_model=RatesSnapshotResponse,
	status_code=status.HTTP_200_OK,
	summary='Current exchange rates snapshot',
)
async def get_rates(
	controller: Annotated[RateRefreshController, Depends(get_controller)],
) -> RatesSnapshotResponse:
	return RatesSnapshotResponse(**build_snapshot(controller, controller.state))


@router.post(
	'/rates/refresh',
	response_model=RefreshResponse,
	status_code=status.HTTP_200_OK,
	summary='Refresh exchange rates (at most once every 5 minutes)',
)
async def refresh_rates(
	controller: Annotated[RateRefreshController, Depends(get_controller)],
) -> RefreshResponse:
	outcome = await controller.attempt_refresh()
	return RefreshResponse(
		**build_snapshot(controller, outcome.state),
		notice=outcome.notice.message if outcome.notice else None,
	)


@router.get('/health', response_model=HealthResponse, summary='Liveness check')
async def health() -> HealthResponse:
	return HealthResponse()
