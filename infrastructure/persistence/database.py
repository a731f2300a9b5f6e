import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import text
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from tenacity import (
	before_sleep_log,
	retry,
	retry_if_exception_type,
	stop_after_attempt,
	wait_exponential,
)

from infrastructure.persistence.models.currency import Base

logger = logging.getLogger(__name__)


class Database:
	def __init__(self, db_url: str, echo: bool = False):
		self.engine = create_async_engine(db_url, echo=echo)
		self.session_factory = async_sessionmaker(
			self.engine,
			class_=AsyncSession,
			autoflush=True,
			expire_on_commit=False,
		)

	async def wait_until_ready(self, attempts: int = 5) -> None:
		"""Block until the database accepts connections, backing off between tries."""

		@retry(
			stop=stop_after_attempt(attempts),
			wait=wait_exponential(multiplier=1, min=1, max=10),
			retry=retry_if_exception_type((OperationalError, ConnectionError, OSError)),
			before_sleep=before_sleep_log(logger, logging.WARNING),
			reraise=True,
		)
		async def _ping() -> None:
			async with self.engine.connect() as conn:
				await conn.execute(text('SELECT 1'))

		await _ping()

	async def create_tables(self) -> None:
		async with self.engine.begin() as conn:
			await conn.run_sync(Base.metadata.create_all)

	async def drop_tables(self) -> None:
		async with self.engine.begin() as conn:
			await conn.run_sync(Base.metadata.drop_all)

	async def health_check(self) -> bool:
		async with self.engine.connect() as conn:
			await conn.execute(text('SELECT 1'))
		return True

	async def close(self) -> None:
		await self.engine.dispose()

	@asynccontextmanager
	async def session(self) -> AsyncIterator[AsyncSession]:
		async with self.session_factory() as session:
			try:
				yield session
				await session.commit()
			except Exception:
				await session.rollback()
				raise
			finally:
				await session.close()
