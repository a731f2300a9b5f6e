import asyncio
import logging

import bcrypt
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from application.services.rate_resolver import RateResolver
from domain.exceptions.currency import (
	AuthenticationError,
	PersistenceError,
	UserAlreadyExistsError,
	ValidationError,
)
from domain.models.currency import User
from infrastructure.persistence.database import Database
from infrastructure.persistence.repositories.user import UserRepository

logger = logging.getLogger(__name__)

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 50
PASSWORD_MIN_LENGTH = 6
# bcrypt only looks at the first 72 bytes
PASSWORD_MAX_BYTES = 72


def hash_password(password: str) -> str:
	return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')


def verify_password(password: str, password_hash: str) -> bool:
	return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))


class UserService:
	def __init__(self, db: Database, rate_resolver: RateResolver):
		self.db = db
		self.rate_resolver = rate_resolver

	async def register(self, username: str, password: str) -> User:
		username = username.strip()
		if not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
			raise ValidationError(
				f'Username must be {USERNAME_MIN_LENGTH}-{USERNAME_MAX_LENGTH} characters long'
			)
		if len(password) < PASSWORD_MIN_LENGTH or len(password.encode('utf-8')) > PASSWORD_MAX_BYTES:
			raise ValidationError(
				f'Password must be at least {PASSWORD_MIN_LENGTH} characters '
				f'and at most {PASSWORD_MAX_BYTES} bytes long'
			)

		password_hash = await asyncio.to_thread(hash_password, password)

		try:
			async with self.db.session() as session:
				user = await UserRepository(session).add(username, password_hash)
		except IntegrityError as e:
			raise UserAlreadyExistsError(f'User {username} already exists') from e
		except SQLAlchemyError as e:
			logger.error(f'Failed to register user {username}: {e}')
			raise PersistenceError('Failed to register user') from e

		logger.info(f'Registered user {user.username} ({user.id})')
		await self.rate_resolver.resolve_user_rates(user.id)
		return user

	async def authenticate(self, username: str, password: str) -> User:
		try:
			async with self.db.session() as session:
				found = await UserRepository(session).get_credentials(username.strip())
		except SQLAlchemyError as e:
			logger.error(f'Failed to look up user {username}: {e}')
			raise PersistenceError('Failed to authenticate user') from e

		if found is None or len(password.encode('utf-8')) > PASSWORD_MAX_BYTES:
			raise AuthenticationError('Invalid username or password')

		user, password_hash = found
		if not await asyncio.to_thread(verify_password, password, password_hash):
			raise AuthenticationError('Invalid username or password')

		return user
