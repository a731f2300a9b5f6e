from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ConversionResponse(BaseModel):
	id: UUID = Field(..., description='History entry identifier')
	from_currency: str = Field(..., description='Source currency code')
	to_currency: str = Field(..., description='Target currency code')
	amount: Decimal = Field(..., description='Original amount requested')
	result: Decimal = Field(..., description='Converted amount, 4 fractional digits')
	rate: Decimal = Field(..., description='Cross-rate used, 6 fractional digits')
	converted_at: datetime = Field(..., description='When the conversion was recorded (UTC)')

	model_config = ConfigDict(
		from_attributes=True,
		json_schema_extra={
			'example': {
				'id': '0b7f5a38-3c59-4a8e-8f7e-1f0c7e1f2a11',
				'from_currency': 'USD',
				'to_currency': 'EUR',
				'amount': 100.00,
				'result': 85.0,
				'rate': 0.85,
				'converted_at': '2025-09-27T10:30:00',
			}
		},
	)


class HistoryResponse(BaseModel):
	conversions: list[ConversionResponse] = Field(description='Most recent conversions first')


class UserRatesResponse(BaseModel):
	rates: dict[str, Decimal] = Field(description='Currency code to rate against the anchor')

	model_config = ConfigDict(
		json_schema_extra={'example': {'rates': {'USD': 1.0, 'EUR': 0.85, 'RUB': 73.5}}}
	)


class BaseRateResponse(BaseModel):
	code: str = Field(..., description='Currency code')
	rate: Decimal = Field(..., description='Global rate against the anchor')
	is_base: bool = Field(..., description='Whether this currency is the anchor')

	model_config = ConfigDict(from_attributes=True)


class SupportedCurrenciesResponse(BaseModel):
	currencies: list[BaseRateResponse] = Field(description='Global base rates')


class UserResponse(BaseModel):
	id: UUID
	username: str
	created_at: datetime

	model_config = ConfigDict(from_attributes=True)


class HealthResponse(BaseModel):
	status: str
	database: str
