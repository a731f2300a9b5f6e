from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from uuid import UUID


@dataclass(frozen=True)
class CurrencyRate:
    id: UUID
    code: str
    rate: Decimal
    is_base: bool


@dataclass(frozen=True)
class ConversionResult:
    result: Decimal  # Rounded to 4 fractional digits
    rate: Decimal  # Cross-rate, rounded to 6 fractional digits


@dataclass(frozen=True)
class ConversionRecord:
    id: UUID
    user_id: UUID
    amount: Decimal
    from_currency: str
    to_currency: str
    rate: Decimal
    result: Decimal
    converted_at: datetime


@dataclass(frozen=True)
class User:
    id: UUID
    username: str
    created_at: datetime
