from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from utils.localizator import Localizator


def _to_decimal(amount) -> Decimal | None:
    if amount is None or amount == "":
        return None
    try:
        value = Decimal(str(amount))
    except InvalidOperation:
        return None
    return None if value.is_nan() else value


def format_pkr(amount) -> str:
    """
    Format an amount for display, e.g. 8050 -> "Rs 8,050".

    Whole rupees only (half rounds up). Returns "" for missing or
    non-numeric input.
    """
    value = _to_decimal(amount)
    if value is None:
        return ""
    rounded = value.quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return f"{Localizator.get_currency_symbol()} {int(rounded):,}"


def format_price_range(min_amount, max_amount) -> str:
    if not min_amount and not max_amount:
        return ""
    if not min_amount:
        return f"Up to {format_pkr(max_amount)}"
    if not max_amount:
        return f"From {format_pkr(min_amount)}"
    return f"{format_pkr(min_amount)} - {format_pkr(max_amount)}"


def calculate_discount(original_price, current_price) -> int:
    """Discount in whole percent; 0 when there is no markdown."""
    original = _to_decimal(original_price)
    current = _to_decimal(current_price)
    if not original or current is None or original <= current:
        return 0
    percent = (original - current) / original * 100
    return int(percent.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
