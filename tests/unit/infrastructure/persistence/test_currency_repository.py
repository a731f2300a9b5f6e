# nosec B101


import uuid
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from config.settings import DEFAULT_BASE_CURRENCIES, BaseCurrencySeed
from domain.exceptions.currency import CacheError
from domain.models.currency import CurrencyRate
from infrastructure.persistence.repositories.currency import CurrencyRateRepository


@pytest.mark.asyncio
async def test_save_base_currencies_is_idempotent(database):
    async with database.session() as session:
        added = await CurrencyRateRepository(session).save_base_currencies(DEFAULT_BASE_CURRENCIES)

    assert added == 0


@pytest.mark.asyncio
async def test_save_base_currencies_keeps_existing_rates(database):
    seeds = [
        BaseCurrencySeed(code='EUR', rate=Decimal('0.99')),
        BaseCurrencySeed(code='gbp', rate=Decimal('0.75')),
    ]
    cache = AsyncMock()

    async with database.session() as session:
        added = await CurrencyRateRepository(session, cache).save_base_currencies(seeds)

    async with database.session() as session:
        repo = CurrencyRateRepository(session)
        eur = await repo.get_by_code('EUR')
        gbp = await repo.get_by_code('GBP')

    assert added == 1
    assert eur.rate == Decimal('0.85')
    assert gbp.rate == Decimal('0.75')
    assert gbp.is_base is False
    cache.invalidate_base_rates.assert_awaited_once()


@pytest.mark.asyncio
async def test_get_by_code_missing_returns_none(database):
    async with database.session() as session:
        assert await CurrencyRateRepository(session).get_by_code('XYZ') is None


@pytest.mark.asyncio
async def test_list_rates_cache_hit_skips_database(database):
    cached = [CurrencyRate(id=uuid.uuid4(), code='JPY', rate=Decimal('150'), is_base=False)]
    cache = AsyncMock()
    cache.get_base_rates.return_value = cached

    async with database.session() as session:
        rates = await CurrencyRateRepository(session, cache).list_rates()

    assert rates == cached
    cache.set_base_rates.assert_not_awaited()


@pytest.mark.asyncio
@pytest.mark.parametrize('error', [CacheError('Invalid json data'), RedisConnectionError('down')])
async def test_list_rates_falls_back_to_database_when_cache_fails(database, error):
    cache = AsyncMock()
    cache.get_base_rates.side_effect = error
    cache.set_base_rates.side_effect = RedisConnectionError('down')

    async with database.session() as session:
        rates = await CurrencyRateRepository(session, cache).list_rates()

    assert [r.code for r in rates] == ['CNY', 'EUR', 'RUB', 'USD']
