"""
Display Format — строковое представление scaled integer

format_scaled(v, e, d) → "<целая часть>.<дробная часть>"
- d ограничивается FORMAT_MAX_DIGITS
- округление точное, round-half-even
- хвостовые нули удаляются; если дробная часть исчезла целиком,
  добавляется один "0" (никогда не "1.")
- d < 0 → кратчайшее точное представление
- None или отрицательное значение → "0"
"""

from decimal import Decimal
from typing import Final

from src.core.math.decimal_bridge import exact_context, int_digits, to_decimal

FORMAT_MAX_DIGITS: Final[int] = 100


def format_scaled(value: int | None, exponent: int, digits: int) -> str:
    """
    Форматирование scaled integer для отображения.

    Args:
        value: Scaled integer
        exponent: Масштаб
        digits: Количество знаков после точки (> 100 → 100)

    Returns:
        Строка без экспоненциальной записи

    Examples:
        >>> format_scaled(1234567890000000000, 18, 8)
        '1.23456789'
        >>> format_scaled(12345678900000, 14, 8)
        '0.12345679'
        >>> format_scaled(0, 18, 8)
        '0.0'
        >>> format_scaled(1234567890000000000, 18, 0)
        '1'
        >>> format_scaled(None, 18, 8)
        '0'
    """
    if value is None or value < 0:
        return "0"

    digits = min(digits, FORMAT_MAX_DIGITS)
    amount = to_decimal(value, exponent)

    if digits >= 0:
        ctx = exact_context(int_digits(value) + digits + 2)
        amount = ctx.quantize(amount, Decimal(1).scaleb(-digits))

    text = format(amount, "f")
    if "." in text:
        text = text.rstrip("0")
        if text.endswith("."):
            text += "0"
    return text
