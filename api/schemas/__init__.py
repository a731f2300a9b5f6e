from .requests import ConversionRequest, RateUpdateRequest, RegisterRequest
from .responses import (
	BaseRateResponse,
	ConversionResponse,
	HealthResponse,
	HistoryResponse,
	SupportedCurrenciesResponse,
	UserRatesResponse,
	UserResponse,
)

__all__ = [
	'BaseRateResponse',
	'ConversionRequest',
	'ConversionResponse',
	'HealthResponse',
	'HistoryResponse',
	'RateUpdateRequest',
	'RegisterRequest',
	'SupportedCurrenciesResponse',
	'UserRatesResponse',
	'UserResponse',
]
