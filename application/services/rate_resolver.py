import logging
from decimal import Decimal
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from domain.exceptions.currency import CurrencyNotFoundError, InvalidRateError, PersistenceError
from domain.models.currency import CurrencyRate
from domain.services.validation import (
	RATE_MAX_INTEGER_DIGITS,
	RATE_PLACES,
	parse_positive_decimal,
)
from infrastructure.cache.redis_cache import RedisCacheService
from infrastructure.persistence.database import Database
from infrastructure.persistence.repositories.currency import CurrencyRateRepository
from infrastructure.persistence.repositories.user_rate import UserRateRepository

logger = logging.getLogger(__name__)


class RateResolver:
	"""Owns each user's personal rate table.

	A table is seeded from the global base rates the first time it is read and
	then drifts independently: newly added global currencies only reach an
	existing table through ``reset_user_rates`` (or through reconciliation when
	``reconcile_missing`` is enabled). Every operation runs in its own
	transaction.
	"""

	def __init__(
		self,
		db: Database,
		cache_service: RedisCacheService | None = None,
		reconcile_missing: bool = False,
	):
		self.db = db
		self.cache = cache_service
		self.reconcile_missing = reconcile_missing

	async def resolve_user_rates(self, user_id: UUID) -> dict[str, Decimal]:
		try:
			async with self.db.session() as session:
				user_rates = UserRateRepository(session)
				rates = await user_rates.get_rates(user_id)
				if rates and not self.reconcile_missing:
					return rates

				base_rates = await CurrencyRateRepository(session, self.cache).list_rates()
				missing = [c for c in base_rates if c.code not in rates]
				if not missing:
					return rates

				if rates:
					logger.info(f'Adding {len(missing)} new currencies to rate table of user {user_id}')
				else:
					logger.info(f'Seeding rate table of user {user_id} with {len(missing)} currencies')

				await user_rates.insert_missing(user_id, missing)
				return await user_rates.get_rates(user_id)
		except SQLAlchemyError as e:
			logger.error(f'Failed to resolve rates for user {user_id}: {e}')
			raise PersistenceError('Failed to resolve user rates') from e

	async def update_user_rate(
		self, user_id: UUID, currency_code: str, new_rate: Decimal | float | str
	) -> Decimal:
		code = currency_code.strip().upper()
		rate = parse_positive_decimal(
			new_rate, RATE_PLACES, RATE_MAX_INTEGER_DIGITS, InvalidRateError, 'rate'
		)

		try:
			async with self.db.session() as session:
				currency = await CurrencyRateRepository(session).get_by_code(code)
				if currency is None:
					raise CurrencyNotFoundError(f'Currency {code} not found')

				user_rates = UserRateRepository(session)
				# An override must not leave a table holding a single currency
				if await user_rates.count(user_id) == 0:
					base_rates = await CurrencyRateRepository(session, self.cache).list_rates()
					await user_rates.insert_missing(user_id, base_rates)

				await user_rates.upsert(user_id, currency.id, rate)
		except SQLAlchemyError as e:
			logger.error(f'Failed to update {code} rate for user {user_id}: {e}')
			raise PersistenceError('Failed to update user rate') from e

		logger.info(
			f'User {user_id} set {code} rate to {rate}',
			extra={
				'extra_data': {'event': 'rate_override', 'user_id': user_id, 'code': code, 'rate': rate}
			},
		)
		return rate

	async def reset_user_rates(self, user_id: UUID) -> None:
		try:
			async with self.db.session() as session:
				# Straight from the store, never the cache
				base_rates = await CurrencyRateRepository(session).list_rates()
				user_rates = UserRateRepository(session)
				removed = await user_rates.delete_all(user_id)
				await user_rates.insert_missing(user_id, base_rates)
		except SQLAlchemyError as e:
			logger.error(f'Failed to reset rates for user {user_id}: {e}')
			raise PersistenceError('Failed to reset user rates') from e

		logger.info(
			f'Reset rate table of user {user_id}: removed {removed}, restored {len(base_rates)}',
			extra={
				'extra_data': {
					'event': 'rate_reset',
					'user_id': user_id,
					'removed': removed,
					'restored': len(base_rates),
				}
			},
		)

	async def list_base_rates(self) -> list[CurrencyRate]:
		try:
			async with self.db.session() as session:
				return await CurrencyRateRepository(session, self.cache).list_rates()
		except SQLAlchemyError as e:
			logger.error(f'Failed to list base rates: {e}')
			raise PersistenceError('Failed to list base rates') from e
