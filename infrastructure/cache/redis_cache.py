import json
from datetime import timedelta
from decimal import Decimal, InvalidOperation
from uuid import UUID

from redis import asyncio as redis

from domain.exceptions.currency import CacheError
from domain.models.currency import CurrencyRate

BASE_RATES_KEY = "rates:base"


class RedisCacheService:
    def __init__(self, redis_client: redis.Redis, base_rates_ttl: timedelta = timedelta(hours=1)):
        self.redis = redis_client
        self.base_rates_ttl = base_rates_ttl

    async def get_base_rates(self) -> list[CurrencyRate] | None:
        data = await self.redis.get(BASE_RATES_KEY)

        if not data:
            return None

        try:
            rows = json.loads(data)
            return [
                CurrencyRate(
                    id=UUID(row["id"]),
                    code=row["code"],
                    rate=Decimal(row["rate"]),
                    is_base=row["is_base"],
                )
                for row in rows
            ]
        except (ValueError, KeyError, TypeError, InvalidOperation) as e:
            raise CacheError(f"Invalid json data under {BASE_RATES_KEY}: {e}") from e

    async def set_base_rates(self, rates: list[CurrencyRate]) -> None:
        rows = [
            {
                "id": str(rate.id),
                "code": rate.code,
                "rate": str(rate.rate),
                "is_base": rate.is_base,
            }
            for rate in rates
        ]

        await self.redis.setex(BASE_RATES_KEY, self.base_rates_ttl, json.dumps(rows))

    async def invalidate_base_rates(self) -> None:
        await self.redis.delete(BASE_RATES_KEY)
