"""
Shared fixtures: a throwaway SQLite database seeded with the default base rates.
"""

from decimal import Decimal

import pytest
import pytest_asyncio

from config.settings import DEFAULT_BASE_CURRENCIES
from infrastructure.persistence.database import Database
from infrastructure.persistence.repositories.currency import CurrencyRateRepository
from infrastructure.persistence.repositories.user import UserRepository

BASE_RATES = {
    'USD': Decimal('1.0'),
    'EUR': Decimal('0.85'),
    'RUB': Decimal('73.5'),
    'CNY': Decimal('7.14'),
}


@pytest_asyncio.fixture
async def database(tmp_path):
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await db.create_tables()
    async with db.session() as session:
        await CurrencyRateRepository(session).save_base_currencies(DEFAULT_BASE_CURRENCIES)
    yield db
    await db.drop_tables()
    await db.close()


@pytest_asyncio.fixture
async def user_id(database):
    async with database.session() as session:
        user = await UserRepository(session).add('alice', 'not-a-real-hash')
    return user.id


@pytest_asyncio.fixture
async def other_user_id(database):
    async with database.session() as session:
        user = await UserRepository(session).add('bob', 'not-a-real-hash')
    return user.id


@pytest.fixture
def unreachable_database(tmp_path):
    # The parent directory does not exist, so every connection attempt fails
    return Database(f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'test.db'}")


@pytest.fixture
def base_rates():
    return dict(BASE_RATES)
