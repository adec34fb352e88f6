"""
Scale Cache — кэш множителей 10^exponent

Мемоизация идемпотентной чистой функции exponent → 10^exponent
в двух формах: int и Decimal.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Для одного exponent обе формы численно равны
2. Запись кэша после вставки не изменяется (read-only)
3. Вставка атомарна: побеждает один писатель, остальные получают его запись
4. Вытеснения нет: домен exponent на практике мал (единицы, десятки)
"""

import logging
import threading
from decimal import Decimal
from typing import Dict, Final, NamedTuple

logger = logging.getLogger(__name__)

# =============================================================================
# ПАРАМЕТРЫ КЭША
# =============================================================================

# Наиболее частые масштабы: 14 (stablecoins), 18 (native units / wei)
PREPOPULATED_EXPONENTS: Final[tuple[int, ...]] = (14, 18)


class ScaleFactor(NamedTuple):
    """Множитель 10^exponent в целочисленной и десятичной форме"""

    exponent: int
    integer: int
    decimal: Decimal


def _compute_factor(exponent: int) -> ScaleFactor:
    integer = 10**exponent
    return ScaleFactor(exponent=exponent, integer=integer, decimal=Decimal(integer))


_FACTORS: Dict[int, ScaleFactor] = {e: _compute_factor(e) for e in PREPOPULATED_EXPONENTS}
_INSERT_LOCK = threading.Lock()


# =============================================================================
# ДОСТУП К КЭШУ
# =============================================================================


def factor(exponent: int) -> ScaleFactor:
    """
    Множитель 10^exponent из кэша.

    Hit читается без блокировки. Miss вычисляет множитель вне блокировки,
    затем вставляет его через insert-if-absent: если другой поток успел
    раньше, возвращается его запись, а своя отбрасывается.

    Args:
        exponent: Масштаб (неотрицательный)

    Returns:
        ScaleFactor для exponent

    Raises:
        ValueError: Если exponent отрицательный

    Examples:
        >>> factor(6).integer
        1000000
        >>> factor(18).decimal
        Decimal('1000000000000000000')
    """
    cached = _FACTORS.get(exponent)
    if cached is not None:
        return cached

    if exponent < 0:
        raise ValueError(f"exponent must be non-negative, got {exponent}")

    computed = _compute_factor(exponent)
    with _INSERT_LOCK:
        winner = _FACTORS.setdefault(exponent, computed)

    if winner is computed:
        logger.debug("scale factor cached: exponent=%d", exponent)
    return winner


def cached_exponents() -> frozenset[int]:
    """Снимок exponent-ов, уже присутствующих в кэше."""
    return frozenset(_FACTORS)
