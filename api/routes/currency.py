from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from api.dependencies import (
	get_conversion_service,
	get_current_user,
	get_history_ledger,
	get_rate_resolver,
)
from api.schemas import (
	BaseRateResponse,
	ConversionRequest,
	ConversionResponse,
	HistoryResponse,
	RateUpdateRequest,
	SupportedCurrenciesResponse,
	UserRatesResponse,
)
from application.services import ConversionService, HistoryLedger, RateResolver
from domain.models.currency import User

router = APIRouter(prefix='/api', tags=['currency'])

CurrentUser = Annotated[User, Depends(get_current_user)]


@router.get(
	'/currencies',
	response_model=SupportedCurrenciesResponse,
	status_code=status.HTTP_200_OK,
	summary='List global base rates',
)
async def get_supported_currencies(
	resolver: Annotated[RateResolver, Depends(get_rate_resolver)],
) -> SupportedCurrenciesResponse:
	rates = await resolver.list_base_rates()
	return SupportedCurrenciesResponse(
		currencies=[BaseRateResponse.model_validate(rate) for rate in rates]
	)


@router.get(
	'/rates',
	response_model=UserRatesResponse,
	status_code=status.HTTP_200_OK,
	summary="Get the current user's rates",
)
async def get_user_rates(
	user: CurrentUser,
	resolver: Annotated[RateResolver, Depends(get_rate_resolver)],
) -> UserRatesResponse:
	rates = await resolver.resolve_user_rates(user.id)
	return UserRatesResponse(rates=rates)


@router.put(
	'/rates/{currency_code}',
	response_model=UserRatesResponse,
	status_code=status.HTTP_200_OK,
	summary='Override one rate',
)
async def update_user_rate(
	currency_code: Annotated[str, Path(min_length=3, max_length=3)],
	payload: RateUpdateRequest,
	user: CurrentUser,
	resolver: Annotated[RateResolver, Depends(get_rate_resolver)],
) -> UserRatesResponse:
	await resolver.update_user_rate(user.id, currency_code, payload.rate)
	rates = await resolver.resolve_user_rates(user.id)
	return UserRatesResponse(rates=rates)


@router.post(
	'/rates/reset',
	response_model=UserRatesResponse,
	status_code=status.HTTP_200_OK,
	summary='Reset all rates to the global base rates',
)
async def reset_user_rates(
	user: CurrentUser,
	resolver: Annotated[RateResolver, Depends(get_rate_resolver)],
) -> UserRatesResponse:
	await resolver.reset_user_rates(user.id)
	rates = await resolver.resolve_user_rates(user.id)
	return UserRatesResponse(rates=rates)


@router.post(
	'/convert',
	response_model=ConversionResponse,
	status_code=status.HTTP_200_OK,
	summary='Convert an amount with the current user rates',
)
async def convert_currency(
	payload: ConversionRequest,
	user: CurrentUser,
	service: Annotated[ConversionService, Depends(get_conversion_service)],
) -> ConversionResponse:
	record = await service.convert(
		user.id, payload.amount, payload.from_currency, payload.to_currency
	)
	return ConversionResponse.model_validate(record)


@router.get(
	'/history',
	response_model=HistoryResponse,
	status_code=status.HTTP_200_OK,
	summary='List recent conversions',
)
async def get_history(
	user: CurrentUser,
	ledger: Annotated[HistoryLedger, Depends(get_history_ledger)],
	limit: Annotated[int | None, Query(ge=1)] = None,
) -> HistoryResponse:
	records = await ledger.list_recent(user.id, limit)
	return HistoryResponse(conversions=[ConversionResponse.model_validate(r) for r in records])
