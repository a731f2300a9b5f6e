from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal

from domain.exceptions.currency import InvalidAmountError, InvalidCurrencyError, InvalidRateError
from domain.models.currency import ConversionResult
from domain.services.validation import AMOUNT_MAX_INTEGER_DIGITS, RATE_MAX_INTEGER_DIGITS

RESULT_PRECISION = Decimal('0.0001')
RATE_PRECISION = Decimal('0.000001')

MAX_RESULT = Decimal(10) ** AMOUNT_MAX_INTEGER_DIGITS
MAX_RATE = Decimal(10) ** RATE_MAX_INTEGER_DIGITS


def _as_decimal(value: Decimal | float | int | str) -> Decimal:
	if isinstance(value, Decimal):
		return value
	return Decimal(str(value))


def _quantize_within(value: Decimal, precision: Decimal, limit: Decimal) -> Decimal | None:
	# Checked before and after rounding: quantizing a huge value overflows the context
	if value >= limit:
		return None
	rounded = value.quantize(precision, rounding=ROUND_HALF_UP)
	return rounded if rounded < limit else None


def convert(
	amount: Decimal | float | int,
	from_currency: str,
	to_currency: str,
	rates: Mapping[str, Decimal | float | int],
) -> ConversionResult:
	"""Convert ``amount`` between two currencies of a single rate table.

	All rates in ``rates`` are expressed against the same anchor unit, so the
	amount is normalized to the anchor and then scaled to the target. The
	cross-rate is computed from the rates directly so that rounding of the
	result and of the displayed rate stay independent.

	Raises ``InvalidAmountError`` or ``InvalidRateError`` when the result or the
	cross-rate does not fit the stored columns.
	"""
	for code in (from_currency, to_currency):
		if not rates.get(code):
			raise InvalidCurrencyError(f'Unknown currency: {code}')

	from_rate = _as_decimal(rates[from_currency])
	to_rate = _as_decimal(rates[to_currency])

	amount_in_anchor = _as_decimal(amount) / from_rate
	converted = _quantize_within(amount_in_anchor * to_rate, RESULT_PRECISION, MAX_RESULT)
	if converted is None:
		raise InvalidAmountError(
			f'Invalid amount: result of {from_currency} to {to_currency} is too large'
		)

	cross_rate = _quantize_within(to_rate / from_rate, RATE_PRECISION, MAX_RATE)
	if cross_rate is None:
		raise InvalidRateError(
			f'Invalid rate: {from_currency} to {to_currency} cross-rate is too large'
		)

	return ConversionResult(result=converted, rate=cross_rate)
