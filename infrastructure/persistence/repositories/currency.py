import logging

from redis.exceptions import RedisError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from config.settings import BaseCurrencySeed
from domain.exceptions.currency import CacheError
from domain.models.currency import CurrencyRate
from infrastructure.cache.redis_cache import RedisCacheService
from infrastructure.persistence.models.currency import CurrencyRateDB

logger = logging.getLogger(__name__)


def _to_domain(row: CurrencyRateDB) -> CurrencyRate:
	return CurrencyRate(id=row.id, code=row.code, rate=row.rate, is_base=row.is_base)


class CurrencyRateRepository:
	"""Global base rates, shared by every user rate table."""

	def __init__(self, db_session: AsyncSession, cache_service: RedisCacheService | None = None):
		self.db_session = db_session
		self.cache = cache_service

	async def list_rates(self) -> list[CurrencyRate]:
		cached = await self._read_cache()
		if cached:
			return cached

		result = await self.db_session.execute(select(CurrencyRateDB).order_by(CurrencyRateDB.code))
		rates = [_to_domain(row) for row in result.scalars().all()]

		if rates and self.cache is not None:
			try:
				await self.cache.set_base_rates(rates)
			except RedisError as e:
				logger.warning(f'Failed to cache base rates: {e}')

		return rates

	async def get_by_code(self, code: str) -> CurrencyRate | None:
		result = await self.db_session.execute(
			select(CurrencyRateDB).filter(CurrencyRateDB.code == code)
		)
		row = result.scalars().first()
		return _to_domain(row) if row else None

	async def save_base_currencies(self, seeds: list[BaseCurrencySeed]) -> int:
		"""Insert seed currencies whose code is not stored yet. Existing rows are kept."""
		existing_codes = set(
			(await self.db_session.execute(select(CurrencyRateDB.code))).scalars().all()
		)
		new_currencies = [s for s in seeds if s.code.upper() not in existing_codes]

		if new_currencies:
			self.db_session.add_all(
				[
					CurrencyRateDB(code=s.code.upper(), rate=s.rate, is_base=s.is_base)
					for s in new_currencies
				]
			)
			await self.db_session.flush()

			if self.cache is not None:
				try:
					await self.cache.invalidate_base_rates()
				except RedisError as e:
					logger.warning(f'Failed to invalidate base rate cache: {e}')

		return len(new_currencies)

	async def _read_cache(self) -> list[CurrencyRate] | None:
		if self.cache is None:
			return None
		try:
			cached = await self.cache.get_base_rates()
		except (CacheError, RedisError) as e:
			logger.warning(f'Base rate cache unavailable, reading database: {e}')
			return None

		logger.debug(f'Base rate cache {"HIT" if cached else "MISS"}')
		return cached
