from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from domain.exceptions.currency import ValidationError

# A REAL column on SQLite keeps 15 significant digits
AMOUNT_PLACES = 4
AMOUNT_MAX_INTEGER_DIGITS = 11
RATE_PLACES = 6
RATE_MAX_INTEGER_DIGITS = 9


def parse_positive_decimal(
	value: Decimal | float | int | str,
	places: int,
	max_integer_digits: int,
	error_cls: type[ValidationError],
	field: str,
) -> Decimal:
	"""Parse ``value`` into a finite positive Decimal rounded to ``places`` digits.

	Raises ``error_cls`` when the value is not a number, is not finite, has more
	than ``max_integer_digits`` integer digits or rounds to zero or below.
	"""
	if isinstance(value, bool):
		raise error_cls(f'Invalid {field}: {value!r}')
	try:
		number = value if isinstance(value, Decimal) else Decimal(str(value).strip())
	except (InvalidOperation, ValueError) as e:
		raise error_cls(f'Invalid {field}: {value!r}') from e

	if not number.is_finite():
		raise error_cls(f'Invalid {field}: {value!r}')

	if number <= 0:
		raise error_cls(f'Invalid {field}: must be greater than zero')
	if number.adjusted() >= max_integer_digits:
		raise error_cls(f'Invalid {field}: too large')

	quantized = number.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
	if quantized <= 0:
		raise error_cls(f'Invalid {field}: must be greater than zero')
	if quantized.adjusted() >= max_integer_digits:
		raise error_cls(f'Invalid {field}: too large')

	return quantized
