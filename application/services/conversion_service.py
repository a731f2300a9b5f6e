from decimal import Decimal
from uuid import UUID

from application.services.history_ledger import HistoryLedger
from application.services.rate_resolver import RateResolver
from domain.exceptions.currency import InvalidAmountError
from domain.models.currency import ConversionRecord
from domain.services.conversion import convert
from domain.services.validation import (
	AMOUNT_MAX_INTEGER_DIGITS,
	AMOUNT_PLACES,
	parse_positive_decimal,
)


class ConversionService:
	def __init__(self, rate_resolver: RateResolver, history_ledger: HistoryLedger):
		self.rate_resolver = rate_resolver
		self.history_ledger = history_ledger

	async def convert(
		self,
		user_id: UUID,
		amount: Decimal | float | str,
		from_currency: str,
		to_currency: str,
	) -> ConversionRecord:
		amount = parse_positive_decimal(
			amount, AMOUNT_PLACES, AMOUNT_MAX_INTEGER_DIGITS, InvalidAmountError, 'amount'
		)
		from_currency = from_currency.strip().upper()
		to_currency = to_currency.strip().upper()

		rates = await self.rate_resolver.resolve_user_rates(user_id)
		conversion = convert(amount, from_currency, to_currency, rates)

		return await self.history_ledger.record(
			user_id=user_id,
			amount=amount,
			from_currency=from_currency,
			to_currency=to_currency,
			rate=conversion.rate,
			result=conversion.result,
		)
