from decimal import Decimal
from functools import lru_cache

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseCurrencySeed(BaseModel):
	code: str = Field(..., min_length=3, max_length=3)
	rate: Decimal = Field(..., gt=0)
	is_base: bool = False


DEFAULT_BASE_CURRENCIES = [
	BaseCurrencySeed(code='USD', rate=Decimal('1.0'), is_base=True),
	BaseCurrencySeed(code='EUR', rate=Decimal('0.85')),
	BaseCurrencySeed(code='RUB', rate=Decimal('73.5')),
	BaseCurrencySeed(code='CNY', rate=Decimal('7.14')),
]


class Settings(BaseSettings):
	DATABASE_URL: str = 'sqlite+aiosqlite:///./currency_converter.db'
	DB_CONNECT_ATTEMPTS: int = 5

	# Empty string disables the base rate cache
	REDIS_URL: str = 'redis://localhost:6379'
	BASE_RATES_CACHE_TTL_SECONDS: int = 3600

	BASE_CURRENCIES: list[BaseCurrencySeed] = Field(
		default_factory=lambda: list(DEFAULT_BASE_CURRENCIES)
	)
	RECONCILE_MISSING_CURRENCIES: bool = False
	HISTORY_LIMIT: int = 50

	# Application
	APP_NAME: str = 'Currency Converter API'
	# Echo SQL statements
	DEBUG: bool = False

	# Logging
	LOG_LEVEL: str = 'INFO'
	LOG_DIRECTORY: str = ''
	LOG_JSON: bool = False

	model_config = SettingsConfigDict(env_file='.env', case_sensitive=False, extra='ignore')


@lru_cache
def get_settings() -> Settings:
	return Settings()
