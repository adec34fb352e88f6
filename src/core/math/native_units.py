"""
Native Units — конверсии для масштаба 18 (wei-подобные единицы)

Специализации decimal_bridge / float_boundary с фиксированным exponent=18
и три именованные политики scaled → display:

- BALANCED:  всегда через Decimal; ABOVE → PrecisionLossError
- OPTIMIZED: value <= int64 max → прямое деление в machine arithmetic
             (без Decimal); ненулевой результат < 1e-17 отклоняется;
             большие значения → BALANCED
- SAFE:      value > 2^53 * 10^18 отклоняется до конверсии, далее BALANCED

Все три политики используют один и тот же медленный путь
(scaled_to_float), поэтому расходиться могут только на быстром пути.
Состояния нет.
"""

from enum import Enum
from typing import Callable, Dict, Final

from src.core.math.decimal_bridge import (
    float_to_scaled,
    float_to_scaled_fast,
    float_to_scaled_percent,
    scaled_to_whole_units,
)
from src.core.math.float_boundary import (
    scaled_to_float,
    validate_display_amount,
    validate_scaled_input,
)
from src.core.math.integer_text import format_integer_text
from src.core.math.precision_errors import PrecisionLossError, ValueTooLargeError

# =============================================================================
# ПАРАМЕТРЫ МАСШТАБОВ
# =============================================================================

# Native units (ETH wei и ERC-20 с 18 знаками)
NATIVE_UNITS_EXPONENT: Final[int] = 18

# Stablecoin-масштаб
STABLE_UNITS_EXPONENT: Final[int] = 14

# Максимальная мантисса double
DOUBLE_MANTISSA_LIMIT: Final[int] = 2**53

# SAFE: максимальное значение native units с точной мантиссой double
MAX_SAFE_NATIVE_UNITS: Final[int] = DOUBLE_MANTISSA_LIMIT * 10**NATIVE_UNITS_EXPONENT

# OPTIMIZED: граница быстрого пути (int64)
FAST_PATH_MAX_NATIVE_UNITS: Final[int] = 2**63 - 1

# OPTIMIZED: минимальный осмысленный ненулевой display amount
OPTIMIZED_DISPLAY_FLOOR: Final[float] = 1e-17

_NATIVE_DIVISOR: Final[float] = 1e18


class ConversionMode(str, Enum):
    """Политика конверсии native units → display"""

    BALANCED = "balanced"
    OPTIMIZED = "optimized"
    SAFE = "safe"


# =============================================================================
# NATIVE UNITS → DISPLAY
# =============================================================================


def natural_units_to_display_balanced(value: int | None) -> float:
    """
    Native units → display amount, всегда через Decimal.

    Raises:
        NullInputError, NegativeInputError, PrecisionLossError

    Examples:
        >>> natural_units_to_display_balanced(10**18)
        1.0
    """
    return scaled_to_float(value, NATIVE_UNITS_EXPONENT)


def natural_units_to_display_optimized(value: int | None) -> float:
    """
    Native units → display amount с быстрым путём без Decimal.

    Быстрый путь не классифицирует точность: 10^17 даёт 0.1, тогда как
    BALANCED отклоняет то же значение (float 0.1 больше истинного).

    Raises:
        NullInputError, NegativeInputError
        PrecisionLossError: ненулевой результат меньше OPTIMIZED_DISPLAY_FLOOR
            или ABOVE на медленном пути
    """
    validate_scaled_input(value)

    if value <= FAST_PATH_MAX_NATIVE_UNITS:
        result = value / _NATIVE_DIVISOR
        if result != 0 and result < OPTIMIZED_DISPLAY_FLOOR:
            raise PrecisionLossError(
                f"display amount {result} below representable floor {OPTIMIZED_DISPLAY_FLOOR}"
            )
        return result

    return natural_units_to_display_balanced(value)


def natural_units_to_display_safe(value: int | None) -> float:
    """
    Native units → display amount с жёстким входным лимитом.

    Raises:
        NullInputError, NegativeInputError
        ValueTooLargeError: value > MAX_SAFE_NATIVE_UNITS
        PrecisionLossError: ABOVE при сужении
    """
    validate_scaled_input(value)

    if value > MAX_SAFE_NATIVE_UNITS:
        raise ValueTooLargeError(
            f"native units value {format_integer_text(value)} exceeds safe limit "
            f"{format_integer_text(MAX_SAFE_NATIVE_UNITS)}"
        )

    return natural_units_to_display_balanced(value)


_TO_DISPLAY: Final[Dict[ConversionMode, Callable[[int | None], float]]] = {
    ConversionMode.BALANCED: natural_units_to_display_balanced,
    ConversionMode.OPTIMIZED: natural_units_to_display_optimized,
    ConversionMode.SAFE: natural_units_to_display_safe,
}


def natural_units_to_display(
    value: int | None,
    mode: ConversionMode = ConversionMode.BALANCED,
) -> float:
    """
    Native units → display amount с выбранной политикой.

    Args:
        value: Native units (scaled integer, exponent=18)
        mode: Политика конверсии

    Returns:
        Display amount

    Raises:
        PrecisionError: см. соответствующую политику
    """
    return _TO_DISPLAY[ConversionMode(mode)](value)


# =============================================================================
# DISPLAY → NATIVE UNITS
# =============================================================================


def display_to_natural_units(
    amount: float,
    mode: ConversionMode = ConversionMode.BALANCED,
) -> int:
    """
    Display amount → native units.

    NaN/Inf и отрицательные значения отклоняются во всех режимах;
    верхней границы нет ни в одном режиме. OPTIMIZED идёт через float_to_scaled_fast,
    который для exponent=18 сводится к общему пути.

    Args:
        amount: Сумма в natural units
        mode: Политика конверсии

    Returns:
        Native units

    Raises:
        PrecisionLossError: NaN/Inf
        NegativeInputError: amount < 0

    Examples:
        >>> display_to_natural_units(1.5)
        1500000000000000000
    """
    mode = ConversionMode(mode)
    validate_display_amount(amount)

    if mode is ConversionMode.OPTIMIZED:
        return float_to_scaled_fast(amount, NATIVE_UNITS_EXPONENT)

    return float_to_scaled(amount, NATIVE_UNITS_EXPONENT)


# =============================================================================
# УПРОЩЁННЫЕ КОНВЕРТЕРЫ (clamp, без ошибок)
# =============================================================================


def float_to_native_units(amount: float) -> int:
    """Display amount → native units; отрицательный вход → 0."""
    return float_to_scaled_fast(amount, NATIVE_UNITS_EXPONENT)


def float_to_stable_units(amount: float) -> int:
    """Display amount → stablecoin units (exponent=14); отрицательный вход → 0."""
    return float_to_scaled_fast(amount, STABLE_UNITS_EXPONENT)


def float_to_stable_units_percent(amount: float) -> int:
    """Процент → stablecoin units, делённые на 100."""
    return float_to_scaled_percent(amount, STABLE_UNITS_EXPONENT)


def stable_units_to_whole(value: int | None) -> int:
    """Stablecoin units → целая часть; None или отрицательное → 0."""
    return scaled_to_whole_units(value, STABLE_UNITS_EXPONENT)
