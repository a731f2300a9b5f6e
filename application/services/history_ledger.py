import logging
import uuid
from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy.exc import SQLAlchemyError

from domain.exceptions.currency import PersistenceError, ValidationError
from domain.models.currency import ConversionRecord
from infrastructure.persistence.database import Database
from infrastructure.persistence.repositories.history import HistoryRepository

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 50


def _as_naive_utc(timestamp: datetime) -> datetime:
	if timestamp.tzinfo is None:
		return timestamp
	return timestamp.astimezone(UTC).replace(tzinfo=None)


class HistoryLedger:
	"""Append-only record of successful conversions, scoped per user."""

	def __init__(self, db: Database, max_limit: int = DEFAULT_HISTORY_LIMIT):
		self.db = db
		self.max_limit = max_limit

	async def record(
		self,
		user_id: uuid.UUID,
		amount: Decimal,
		from_currency: str,
		to_currency: str,
		rate: Decimal,
		result: Decimal,
		timestamp: datetime | None = None,
	) -> ConversionRecord:
		entry = ConversionRecord(
			id=uuid.uuid4(),
			user_id=user_id,
			amount=amount,
			from_currency=from_currency,
			to_currency=to_currency,
			rate=rate,
			result=result,
			converted_at=_as_naive_utc(timestamp or datetime.now(UTC)),
		)

		try:
			async with self.db.session() as session:
				await HistoryRepository(session).add(entry)
		except SQLAlchemyError as e:
			logger.error(f'Failed to record conversion for user {user_id}: {e}')
			raise PersistenceError('Failed to record conversion') from e

		logger.debug(
			f'Recorded conversion {entry.id}: {amount} {from_currency} -> {result} {to_currency}'
		)
		return entry

	async def list_recent(self, user_id: uuid.UUID, limit: int | None = None) -> list[ConversionRecord]:
		limit = self.max_limit if limit is None else limit
		if limit < 1 or limit > self.max_limit:
			raise ValidationError(f'limit must be between 1 and {self.max_limit}')

		try:
			async with self.db.session() as session:
				return await HistoryRepository(session).list_recent(user_id, limit)
		except SQLAlchemyError as e:
			logger.error(f'Failed to list conversions for user {user_id}: {e}')
			raise PersistenceError('Failed to list conversion history') from e
