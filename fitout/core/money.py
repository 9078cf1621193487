import math
import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext

MONEY_QUANT = Decimal("0.01")
QUANTITY_QUANT = Decimal("0.001")
WHOLE_QUANT = Decimal("1")

# Leading decimal literal, the same prefix a browser's parseFloat reads.
_LEADING_NUMBER = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def quantize_half_up(value: Decimal | int | float | str, quant: Decimal) -> Decimal:
    """Round to ``quant`` with enough context precision for any finite magnitude."""
    number = Decimal(str(value))
    with localcontext() as ctx:
        if number.is_finite():
            ctx.prec = max(ctx.prec, number.adjusted() - quant.as_tuple().exponent + 2)
        return number.quantize(quant, rounding=ROUND_HALF_UP)


def to_money(value: Decimal | int | float | str) -> Decimal:
    return quantize_half_up(value, MONEY_QUANT)


def to_quantity(value: Decimal | int | float | str) -> Decimal:
    return quantize_half_up(value, QUANTITY_QUANT)


def parse_number(value: object) -> float:
    """Lenient numeric parse used for form input: anything unusable is 0.

    Strings are read up to the end of their leading number, so ``"12kg"`` is 12
    and ``"1,000"`` is 1.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float, Decimal)):
        try:
            number = float(value)
        except OverflowError:
            return 0.0
    else:
        match = _LEADING_NUMBER.match(str(value))
        if match is None:
            return 0.0
        number = float(match.group())
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def to_decimal_or_none(value: object) -> Decimal | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    if not number.is_finite():
        return None
    return number


# Largest values the ledger's Numeric columns can hold.
MAX_PART_PRICE = Decimal("9999999999.99")  # Numeric(12, 2)
MAX_ENTRY_QUANTITY = Decimal("999999999.999")  # Numeric(12, 3)
MAX_RUNNING_QUANTITY = Decimal("99999999999.999")  # Numeric(14, 3)
MAX_RUNNING_VALUE = Decimal("99999999999999.99")  # Numeric(16, 2)
