"""
Integer Text — разбор и запись целых в текстовом виде

Строгий разбор без поблажек int(): никаких подчёркиваний, пробелов
и префиксов кроме явного "0x" для base-16.

Base-10 преобразования идут через Decimal: int(str) и str(int)
ограничены sys.get_int_max_str_digits() (4300 цифр по умолчанию),
а scaled integer не ограничен по разрядности.
"""

import re
from decimal import Decimal
from typing import Final

from src.core.math.precision_errors import InvalidTextError

DECIMAL_TEXT_PATTERN: Final[re.Pattern[str]] = re.compile(r"[+-]?[0-9]+")
HEX_TEXT_PATTERN: Final[re.Pattern[str]] = re.compile(r"[0-9a-fA-F]+")
HEX_PREFIX: Final[str] = "0x"


def format_integer_text(value: int) -> str:
    """
    Base-10 запись целого любой разрядности.

    Examples:
        >>> format_integer_text(-42)
        '-42'
        >>> len(format_integer_text(10**5000))
        5001
    """
    return format(Decimal(value), "f")


def try_parse_decimal(text: str) -> int | None:
    """Base-10 разбор; None если текст не является целым."""
    if DECIMAL_TEXT_PATTERN.fullmatch(text) is None:
        return None
    return int(Decimal(text))


def try_parse_hex(text: str) -> int | None:
    """Base-16 разбор строки с префиксом 0x; None если не подходит."""
    if not text.startswith(HEX_PREFIX):
        return None
    digits = text[len(HEX_PREFIX) :]
    if HEX_TEXT_PATTERN.fullmatch(digits) is None:
        return None
    # Лимит int_max_str_digits на base-16 не распространяется
    return int(digits, 16)


def parse_integer_text(text: str, base: int = 10) -> int:
    """
    Разбор целого в заданной системе счисления.

    Args:
        text: Текст (base 10: опциональный знак и цифры; base 16: цифры,
              опционально с префиксом 0x)
        base: 10 или 16

    Returns:
        Разобранное целое

    Raises:
        InvalidTextError: Если текст пустой или не разбирается
        ValueError: Если base не 10 и не 16
    """
    if base == 10:
        parsed = try_parse_decimal(text)
    elif base == 16:
        digits = text[len(HEX_PREFIX) :] if text.startswith(HEX_PREFIX) else text
        parsed = int(digits, 16) if HEX_TEXT_PATTERN.fullmatch(digits) else None
    else:
        raise ValueError(f"base must be 10 or 16, got {base}")

    if parsed is None:
        raise InvalidTextError(f"invalid base-{base} integer text: {text!r}")
    return parsed
