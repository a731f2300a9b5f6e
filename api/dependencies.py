import logging
from datetime import timedelta
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from redis.asyncio import Redis

from application.services import ConversionService, HistoryLedger, RateResolver, UserService
from config.settings import get_settings
from domain.exceptions.currency import AuthenticationError
from domain.models.currency import User
from infrastructure.cache.redis_cache import RedisCacheService
from infrastructure.persistence.database import Database
from infrastructure.persistence.repositories.currency import CurrencyRateRepository

logger = logging.getLogger(__name__)

security = HTTPBasic()


class AppDependencies:
	"""Container for application-wide singleton dependencies."""

	db: Database | None = None
	redis_client: Redis | None = None
	redis_cache: RedisCacheService | None = None


deps = AppDependencies()


def init_dependencies() -> None:
	"""Initialize all singleton dependencies. Called at app startup."""
	logger.info('Initializing dependencies...')
	settings = get_settings()

	deps.db = Database(settings.DATABASE_URL, echo=settings.DEBUG)
	if settings.REDIS_URL:
		deps.redis_client = Redis.from_url(settings.REDIS_URL, decode_responses=True)
		deps.redis_cache = RedisCacheService(
			deps.redis_client,
			base_rates_ttl=timedelta(seconds=settings.BASE_RATES_CACHE_TTL_SECONDS),
		)
	else:
		logger.info('REDIS_URL is empty, base rate cache disabled')

	logger.info('Dependencies initialized')


async def cleanup_dependencies() -> None:
	logger.info('Cleaning up dependencies...')

	if deps.redis_client:
		await deps.redis_client.aclose()
	if deps.db:
		await deps.db.close()

	logger.info('Cleanup complete')


async def bootstrap() -> None:
	"""Create the schema and seed the global base rates. Called after init_dependencies()."""
	logger.info('Bootstrapping application...')

	if deps.db is None:
		raise RuntimeError('Dependencies not initialized. Call init_dependencies() first.')

	settings = get_settings()
	await deps.db.wait_until_ready(attempts=settings.DB_CONNECT_ATTEMPTS)
	await deps.db.create_tables()
	logger.info('Database tables created')

	async with deps.db.session() as session:
		repo = CurrencyRateRepository(db_session=session, cache_service=deps.redis_cache)
		added = await repo.save_base_currencies(settings.BASE_CURRENCIES)

	logger.info(f'Bootstrap complete, {added} base currencies added')


def get_database() -> Database:
	if deps.db is None:
		raise RuntimeError('Database is not initialized')
	return deps.db


def get_redis_cache() -> RedisCacheService | None:
	return deps.redis_cache


def get_rate_resolver(
	db: Annotated[Database, Depends(get_database)],
	cache: Annotated[RedisCacheService | None, Depends(get_redis_cache)],
) -> RateResolver:
	return RateResolver(
		db=db,
		cache_service=cache,
		reconcile_missing=get_settings().RECONCILE_MISSING_CURRENCIES,
	)


def get_history_ledger(db: Annotated[Database, Depends(get_database)]) -> HistoryLedger:
	return HistoryLedger(db=db, max_limit=get_settings().HISTORY_LIMIT)


def get_conversion_service(
	rate_resolver: Annotated[RateResolver, Depends(get_rate_resolver)],
	history_ledger: Annotated[HistoryLedger, Depends(get_history_ledger)],
) -> ConversionService:
	return ConversionService(rate_resolver=rate_resolver, history_ledger=history_ledger)


def get_user_service(
	db: Annotated[Database, Depends(get_database)],
	rate_resolver: Annotated[RateResolver, Depends(get_rate_resolver)],
) -> UserService:
	return UserService(db=db, rate_resolver=rate_resolver)


async def get_current_user(
	credentials: Annotated[HTTPBasicCredentials, Depends(security)],
	user_service: Annotated[UserService, Depends(get_user_service)],
) -> User:
	try:
		return await user_service.authenticate(credentials.username, credentials.password)
	except AuthenticationError as e:
		raise HTTPException(
			status_code=status.HTTP_401_UNAUTHORIZED,
			detail=str(e),
			headers={'WWW-Authenticate': 'Basic'},
		) from e
