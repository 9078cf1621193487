
from fitout.core.config import settings
from fitout.core.money import WHOLE_QUANT, quantize_half_up, to_decimal_or_none, to_money
from fitout.services.ledger_service import LedgerSummary

GROUPING_INDIAN = "indian"
GROUPING_INTERNATIONAL = "international"


def _group_digits(digits: str, grouping: str) -> str:
    if grouping == GROUPING_INDIAN and len(digits) > 3:
        head, tail = digits[:-3], digits[-3:]
        pairs = []
        while len(head) > 2:
            pairs.insert(0, head[-2:])
            head = head[:-2]
        if head:
            pairs.insert(0, head)
        return ",".join(pairs + [tail])
    return f"{int(digits):,}"


def format_currency(
    value: object,
    *,
    symbol: str | None = None,
    grouping: str | None = None,
    placeholder: str | None = None,
) -> str:
    amount = to_decimal_or_none(value)
    if amount is None:
        return settings.display_placeholder if placeholder is None else placeholder

    amount = to_money(amount)
    sign = "-" if amount < 0 else ""
    whole, _, cents = f"{abs(amount):.2f}".partition(".")
    grouped = _group_digits(whole, grouping or settings.number_grouping)
    currency = settings.currency_symbol if symbol is None else symbol
    return f"{sign}{currency}{grouped}.{cents}"


def format_quantity(
    value: object,
    *,
    grouping: str | None = None,
    placeholder: str | None = None,
) -> str:
    amount = to_decimal_or_none(value)
    if amount is None:
        return settings.display_placeholder if placeholder is None else placeholder

    rounded = quantize_half_up(amount, WHOLE_QUANT)
    sign = "-" if rounded < 0 else ""
    return f"{sign}{_group_digits(str(abs(int(rounded))), grouping or settings.number_grouping)}"


def present_balance(summary: LedgerSummary) -> dict[str, str]:
    return {
        "unit_price": format_currency(summary.unit_price),
        "total_receipts": format_quantity(summary.total_receipts),
        "total_dispatches": format_quantity(summary.total_dispatches),
        "total_returns": format_quantity(summary.total_returns),
        "current_stock": format_quantity(summary.current_stock),
        "current_value": format_currency(summary.current_value),
    }
