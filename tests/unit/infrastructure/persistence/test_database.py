# nosec B101


from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError

from config.settings import BaseCurrencySeed
from infrastructure.persistence.repositories.currency import CurrencyRateRepository


@pytest.mark.asyncio
async def test_health_check(database):
    assert await database.health_check() is True


@pytest.mark.asyncio
async def test_session_rolls_back_on_error(database):
    with pytest.raises(RuntimeError):
        async with database.session() as session:
            await CurrencyRateRepository(session).save_base_currencies(
                [BaseCurrencySeed(code='GBP', rate=Decimal('0.75'))]
            )
            raise RuntimeError('abort')

    async with database.session() as session:
        assert await CurrencyRateRepository(session).get_by_code('GBP') is None


@pytest.mark.asyncio
async def test_drop_tables_removes_schema(database):
    await database.drop_tables()

    with pytest.raises(OperationalError):
        async with database.session() as session:
            await CurrencyRateRepository(session).get_by_code('USD')

    await database.create_tables()
