"""
Decimal Bridge — конверсия scaled integer ↔ Decimal

Промежуточное представление без потери точности, через которое проходят
все конверсии более высокого уровня.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. to_decimal точен: контекст Decimal подбирается под разрядность значения
2. Bridge никогда не падает на корректном входе (None → 0)
3. float_to_scaled при отрицательном входе возвращает 0 (silent clamp),
   в отличие от границы float_boundary, которая поднимает ошибку
4. Потеря точности > 0.1% при float → int логируется, но не блокирует

ФОРМУЛЫ:
    to_decimal(v, e)      = v / 10^e
    float_to_scaled(x, e) = trunc(round53(x * 10^e))
"""

import logging
import math
from decimal import MAX_EMAX, MIN_EMIN, ROUND_HALF_EVEN, Context, Decimal
from typing import Final

from src.core.math.integer_text import format_integer_text, parse_integer_text
from src.core.math.precision_errors import InvalidTextError
from src.core.math.scale_cache import factor

logger = logging.getLogger(__name__)

# =============================================================================
# ПАРАМЕТРЫ
# =============================================================================

# Минимальная точность контекста Decimal (decimal128)
MIN_DECIMAL_PRECISION: Final[int] = 34

# Порог относительного отклонения для предупреждения float → int
PRECISION_ANOMALY_REL_THRESHOLD: Final[Decimal] = Decimal("0.001")

# Верхняя граница быстрого пути float → int (machine int64)
MAX_INT64: Final[int] = 2**63 - 1

# Быстрый путь float → int допустим только при точном 10^e в double
FAST_PATH_MAX_EXPONENT: Final[int] = 14


def exact_context(digits: int) -> Context:
    """
    Контекст Decimal, достаточный для точной операции над digits цифрами.

    Args:
        digits: Оценка сверху числа значащих цифр результата

    Returns:
        Context с prec >= MIN_DECIMAL_PRECISION и неограниченным порядком
    """
    return Context(
        prec=max(digits, MIN_DECIMAL_PRECISION),
        rounding=ROUND_HALF_EVEN,
        Emax=MAX_EMAX,
        Emin=MIN_EMIN,
    )


def int_digits(value: int) -> int:
    """Оценка сверху количества десятичных цифр |value| (без str())."""
    # log10(2) < 1/3
    return abs(value).bit_length() // 3 + 2


# =============================================================================
# INT → DECIMAL
# =============================================================================


def decimal_from_int(value: int | None) -> Decimal:
    """
    Прямая конверсия без масштабирования.

    Args:
        value: Целое или None

    Returns:
        Decimal(value), Decimal(0) для None
    """
    if value is None:
        return Decimal(0)
    return Decimal(value)


def to_decimal(value: int | None, exponent: int) -> Decimal:
    """
    Scaled integer → Decimal: value / 10^exponent.

    Деление на степень десяти точно при prec >= цифр value, поэтому
    результат не округляется. Знак сохраняется; отрицательные значения
    отбрасываются уже на границе float_boundary.

    Args:
        value: Scaled integer (None → 0)
        exponent: Масштаб

    Returns:
        Точное Decimal значение в natural units

    Examples:
        >>> to_decimal(1500000000000000000, 18)
        Decimal('1.5')
        >>> to_decimal(None, 18)
        Decimal('0')
    """
    if value is None:
        return Decimal(0)

    scale = factor(exponent)
    ctx = exact_context(int_digits(value))
    return ctx.divide(Decimal(value), scale.decimal)


# =============================================================================
# FLOAT → INT
# =============================================================================


def float_to_scaled(value: float, exponent: int) -> int:
    """
    Display amount (float) → scaled integer: trunc(value * 10^exponent).

    Произведение вычисляется точно, затем сужается до мантиссы double
    (53 бита, round-half-even) и только потом усекается. Благодаря этому
    1.23456789 при exponent=18 даёт 1234567890000000000, а не ...890.

    После усечения результат переводится обратно и сравнивается с входом:
    относительное отклонение > PRECISION_ANOMALY_REL_THRESHOLD логируется
    как WARNING. Результат возвращается в любом случае.

    Args:
        value: Сумма в natural units
        exponent: Масштаб

    Returns:
        Scaled integer; 0 для отрицательного или non-finite входа

    Examples:
        >>> float_to_scaled(1.5, 18)
        1500000000000000000
        >>> float_to_scaled(-1.23, 18)
        0
    """
    if not math.isfinite(value) or value < 0:
        return 0

    scale = factor(exponent)
    original = Decimal(value)
    ctx = exact_context(len(original.as_tuple().digits) + exponent + 2)
    product = ctx.multiply(original, scale.decimal)

    narrowed = float(product)
    if math.isinf(narrowed):
        # Произведение вне диапазона double: усекаем точное значение
        result = int(product)
    else:
        result = int(narrowed)

    _check_precision_anomaly(result, original, exponent)
    return result


def _check_precision_anomaly(result: int, original: Decimal, exponent: int) -> None:
    scale = factor(exponent)
    ctx = exact_context(int_digits(result) + len(original.as_tuple().digits) + exponent + 2)
    check = ctx.divide(Decimal(result), scale.decimal)
    if check == original:
        return

    deviation = ctx.abs(ctx.subtract(check, original))
    if deviation > ctx.multiply(original, PRECISION_ANOMALY_REL_THRESHOLD):
        logger.warning(
            "significant precision loss in float_to_scaled: input=%s exponent=%d result=%s",
            original,
            exponent,
            format_integer_text(result),
        )


def float_to_scaled_fast(value: float, exponent: int) -> int:
    """
    float → scaled integer с быстрым путём в machine arithmetic.

    Быстрый путь: exponent <= 14 (10^e точно представим в double и
    произведение умещается в int64). Для остальных случаев —
    float_to_scaled. Оба пути сужают произведение до double, поэтому
    результаты совпадают.

    Args:
        value: Сумма в natural units
        exponent: Масштаб

    Returns:
        Scaled integer; 0 для отрицательного или non-finite входа

    Examples:
        >>> float_to_scaled_fast(1.5, 14)
        150000000000000
    """
    if not math.isfinite(value) or value < 0:
        return 0

    if exponent <= FAST_PATH_MAX_EXPONENT:
        multiplier = float(factor(exponent).integer)
        if value < MAX_INT64 / multiplier:
            return int(value * multiplier)

    return float_to_scaled(value, exponent)


def float_to_scaled_percent(value: float, exponent: int) -> int:
    """
    float → scaled integer с делением на 100 (проценты → доля).

    Args:
        value: Процент (например, 2.5 для 2.5%)
        exponent: Масштаб

    Returns:
        float_to_scaled(value, exponent) // 100
    """
    return float_to_scaled(value, exponent) // 100


# =============================================================================
# INT → WHOLE UNITS / TEXT → INT
# =============================================================================


def scaled_to_whole_units(value: int | None, exponent: int) -> int:
    """
    Целая часть natural units: value // 10^exponent.

    Args:
        value: Scaled integer
        exponent: Масштаб

    Returns:
        Целая часть; 0 для None или отрицательного value
    """
    if value is None or value < 0:
        return 0
    return value // factor(exponent).integer


def parse_scaled_int(text: str) -> int:
    """
    Строгий base-10 разбор пользовательского ввода.

    Args:
        text: Строка с целым

    Returns:
        Разобранное целое

    Raises:
        InvalidTextError: Если строка пустая или не является base-10 целым
    """
    if not text:
        raise InvalidTextError("empty string is not a scaled integer")
    return parse_integer_text(text, base=10)
