from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from domain.models.currency import ConversionRecord
from infrastructure.persistence.models.currency import ConversionHistoryDB


def _to_domain(row: ConversionHistoryDB) -> ConversionRecord:
	return ConversionRecord(
		id=row.id,
		user_id=row.user_id,
		amount=row.amount,
		from_currency=row.from_currency,
		to_currency=row.to_currency,
		rate=row.rate,
		result=row.result,
		converted_at=row.converted_at,
	)


class HistoryRepository:
	def __init__(self, db_session: AsyncSession):
		self.db_session = db_session

	async def add(self, record: ConversionRecord) -> ConversionRecord:
		row = ConversionHistoryDB(
			id=record.id,
			user_id=record.user_id,
			amount=record.amount,
			from_currency=record.from_currency,
			to_currency=record.to_currency,
			rate=record.rate,
			result=record.result,
			converted_at=record.converted_at,
		)
		self.db_session.add(row)
		await self.db_session.flush()
		return record

	async def list_recent(self, user_id: UUID, limit: int) -> list[ConversionRecord]:
		stmt = (
			select(ConversionHistoryDB)
			.filter(ConversionHistoryDB.user_id == user_id)
			.order_by(ConversionHistoryDB.converted_at.desc())
			.limit(limit)
		)
		result = await self.db_session.execute(stmt)
		return [_to_domain(row) for row in result.scalars().all()]
