"""
Float Boundary — граница Decimal ↔ machine double

Сужение Decimal до float с классификацией точности и решением
accept/reject.

ПОЛИТИКА ТОЧНОСТИ (асимметричная, сохраняется намеренно):
- EXACT  → принимается
- BELOW  → принимается (float меньше истинного значения: округление к нулю,
           точность ниже минимальной единицы не важна для отображения)
- ABOVE  → PrecisionLossError (float больше истинного значения)

Проверки None и знака выполняются до любой арифметики.
"""

import math
from decimal import Decimal
from enum import Enum

from src.core.math.decimal_bridge import to_decimal
from src.core.math.integer_text import format_integer_text
from src.core.math.precision_errors import (
    NegativeInputError,
    NullInputError,
    PrecisionLossError,
)


class AccuracyClass(str, Enum):
    """Результат сужения Decimal → float относительно истинного значения"""

    EXACT = "exact"
    BELOW = "below"  # float < истинного значения
    ABOVE = "above"  # float > истинного значения


def classify_accuracy(value: Decimal) -> tuple[float, AccuracyClass]:
    """
    Сужение Decimal до float с классификацией.

    float(Decimal) округляет корректно (round-half-even); сравнение
    Decimal(float) с исходным значением точное. Переполнение даёт ±inf,
    исчезновение порядка — 0.0; оба случая классифицируются тем же
    сравнением.

    Args:
        value: Точное значение

    Returns:
        (ближайший float, AccuracyClass)

    Examples:
        >>> classify_accuracy(Decimal("1.5"))
        (1.5, <AccuracyClass.EXACT: 'exact'>)
        >>> classify_accuracy(Decimal("0.1"))[1]
        <AccuracyClass.ABOVE: 'above'>
        >>> classify_accuracy(Decimal("0.3"))[1]
        <AccuracyClass.BELOW: 'below'>
    """
    narrowed = float(value)
    exact = Decimal(narrowed)

    if exact == value:
        return narrowed, AccuracyClass.EXACT
    if exact > value:
        return narrowed, AccuracyClass.ABOVE
    return narrowed, AccuracyClass.BELOW


def decimal_to_float(value: Decimal) -> float:
    """
    Сужение Decimal до float с проверкой точности.

    Args:
        value: Точное значение

    Returns:
        float (EXACT или BELOW)

    Raises:
        PrecisionLossError: Если float больше истинного значения (ABOVE)
    """
    narrowed, accuracy = classify_accuracy(value)
    if accuracy is AccuracyClass.ABOVE:
        raise PrecisionLossError(f"precision loss during conversion to float: {value}")
    return narrowed


def validate_scaled_input(value: int | None) -> int:
    """
    Проверка scaled integer перед конверсией.

    Raises:
        NullInputError: Если value is None
        NegativeInputError: Если value < 0
    """
    if value is None:
        raise NullInputError("scaled integer value is None")
    if value < 0:
        raise NegativeInputError(
            f"negative scaled integer is invalid: {format_integer_text(value)}"
        )
    return value


def validate_display_amount(amount: float) -> float:
    """
    Проверка display amount перед конверсией в scaled integer.

    Raises:
        PrecisionLossError: Если amount NaN или Inf
        NegativeInputError: Если amount < 0
    """
    if not math.isfinite(amount):
        raise PrecisionLossError(f"invalid display amount: {amount}")
    if amount < 0:
        raise NegativeInputError(f"negative display amount is invalid: {amount}")
    return amount


def scaled_to_float(value: int | None, exponent: int) -> float:
    """
    Scaled integer → float через Decimal (Balanced-политика для любого масштаба).

    Args:
        value: Scaled integer
        exponent: Масштаб

    Returns:
        Сумма в natural units

    Raises:
        NullInputError: value is None
        NegativeInputError: value < 0
        PrecisionLossError: сужение до float округлило вверх

    Examples:
        >>> scaled_to_float(123456789, 8)
        1.23456789
        >>> scaled_to_float(10**20, 18)
        100.0
    """
    validate_scaled_input(value)
    return decimal_to_float(to_decimal(value, exponent))
