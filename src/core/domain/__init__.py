"""
Domain models and value objects.

Contains the nullable scaled-integer value type, its pooled storage and
the serialization model built on top of it.
"""

from src.core.domain.int_pool import POOL_MAX_FREE, SCALED_INT_POOL, IntCell, IntCellPool
from src.core.domain.scaled_amount import ScaledAmount
from src.core.domain.scaled_int import (
    FLOAT_DIRECT_INT_LIMIT,
    INT64_MAX,
    INT64_MIN,
    UINT64_MAX,
    ScaledInt,
)

__all__ = [
    # Pool
    "POOL_MAX_FREE",
    "SCALED_INT_POOL",
    "IntCell",
    "IntCellPool",
    # ScaledInt
    "FLOAT_DIRECT_INT_LIMIT",
    "INT64_MAX",
    "INT64_MIN",
    "UINT64_MAX",
    "ScaledInt",
    # Models
    "ScaledAmount",
]
