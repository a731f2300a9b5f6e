from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ConversionRequest(BaseModel):
	from_currency: str = Field(..., min_length=3, max_length=3)
	to_currency: str = Field(..., min_length=3, max_length=3)
	amount: Decimal = Field(..., gt=0)

	@field_validator('from_currency', 'to_currency')
	@classmethod
	def uppercase_currency(cls, v: str):
		return v.upper()

	model_config = ConfigDict(
		json_schema_extra={'example': {'from_currency': 'USD', 'to_currency': 'EUR', 'amount': 100.00}}
	)


class RateUpdateRequest(BaseModel):
	rate: Decimal = Field(..., gt=0, description='New rate against the anchor currency')

	model_config = ConfigDict(json_schema_extra={'example': {'rate': 0.9}})


class RegisterRequest(BaseModel):
	username: str = Field(..., min_length=3, max_length=50)
	password: str = Field(..., min_length=6, max_length=72)

	model_config = ConfigDict(
		json_schema_extra={'example': {'username': 'alice', 'password': 'correct-horse'}}
	)
