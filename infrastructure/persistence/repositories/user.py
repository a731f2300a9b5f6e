from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from domain.models.currency import User
from infrastructure.persistence.models.currency import UserDB


class UserRepository:
	def __init__(self, db_session: AsyncSession):
		self.db_session = db_session

	async def add(self, username: str, password_hash: str) -> User:
		row = UserDB(username=username, password_hash=password_hash)
		self.db_session.add(row)
		await self.db_session.flush()
		await self.db_session.refresh(row)
		return User(id=row.id, username=row.username, created_at=row.created_at)

	async def get_credentials(self, username: str) -> tuple[User, str] | None:
		result = await self.db_session.execute(select(UserDB).filter(UserDB.username == username))
		row = result.scalars().first()
		if row is None:
			return None
		return User(id=row.id, username=row.username, created_at=row.created_at), row.password_hash
