import logging
import uuid
from decimal import Decimal

from sqlalchemy import delete, func, insert, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from domain.models.currency import CurrencyRate
from infrastructure.persistence.models.currency import CurrencyRateDB, UserRateDB

logger = logging.getLogger(__name__)

# Dialects offering INSERT ... ON CONFLICT natively
_UPSERT_DIALECTS = {
	'sqlite': sqlite.insert,
	'postgresql': postgresql.insert,
}


class UserRateRepository:
	"""Per-user rate entries, one per (user, currency)."""

	def __init__(self, db_session: AsyncSession):
		self.db_session = db_session

	@property
	def _dialect_insert(self):
		return _UPSERT_DIALECTS.get(self.db_session.bind.dialect.name)

	async def get_rates(self, user_id: uuid.UUID) -> dict[str, Decimal]:
		stmt = (
			select(CurrencyRateDB.code, UserRateDB.rate)
			.join(CurrencyRateDB, UserRateDB.currency_id == CurrencyRateDB.id)
			.filter(UserRateDB.user_id == user_id)
			.order_by(CurrencyRateDB.code)
		)
		result = await self.db_session.execute(stmt)
		return {code: rate for code, rate in result.all()}

	async def count(self, user_id: uuid.UUID) -> int:
		result = await self.db_session.execute(
			select(func.count()).select_from(UserRateDB).filter(UserRateDB.user_id == user_id)
		)
		return result.scalar_one()

	async def insert_missing(self, user_id: uuid.UUID, currencies: list[CurrencyRate]) -> None:
		"""Create entries at the global rate, leaving existing (user, currency) rows alone."""
		if not currencies:
			return

		rows = [
			{'id': uuid.uuid4(), 'user_id': user_id, 'currency_id': c.id, 'rate': c.rate}
			for c in currencies
		]
		dialect_insert = self._dialect_insert
		if dialect_insert is not None:
			stmt = dialect_insert(UserRateDB).values(rows)
			stmt = stmt.on_conflict_do_nothing(index_elements=['user_id', 'currency_id'])
			await self.db_session.execute(stmt)
			return

		for row in rows:
			try:
				async with self.db_session.begin_nested():
					await self.db_session.execute(insert(UserRateDB).values(**row))
			except IntegrityError:
				logger.debug(f'Rate entry for currency {row["currency_id"]} already exists')

	async def upsert(self, user_id: uuid.UUID, currency_id: uuid.UUID, rate: Decimal) -> None:
		dialect_insert = self._dialect_insert
		if dialect_insert is not None:
			stmt = dialect_insert(UserRateDB).values(
				id=uuid.uuid4(), user_id=user_id, currency_id=currency_id, rate=rate
			)
			stmt = stmt.on_conflict_do_update(
				index_elements=['user_id', 'currency_id'],
				set_={'rate': stmt.excluded.rate, 'updated_at': func.now()},
			)
			await self.db_session.execute(stmt)
			return

		try:
			async with self.db_session.begin_nested():
				await self.db_session.execute(
					insert(UserRateDB).values(
						id=uuid.uuid4(), user_id=user_id, currency_id=currency_id, rate=rate
					)
				)
		except IntegrityError:
			await self.db_session.execute(
				update(UserRateDB)
				.filter(UserRateDB.user_id == user_id, UserRateDB.currency_id == currency_id)
				.values(rate=rate)
			)

	async def delete_all(self, user_id: uuid.UUID) -> int:
		result = await self.db_session.execute(
			delete(UserRateDB).filter(UserRateDB.user_id == user_id)
		)
		return result.rowcount
