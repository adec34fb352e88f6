"""
Contract Validation Module

Проверка внешнего формата сумм против JSON Schema контракта.
"""

from .validators import (
    SCALED_AMOUNT_SCHEMA,
    SCHEMA_DIR,
    ScaledAmountValidator,
    load_schema,
    validate_scaled_amount,
)

__all__ = [
    # Constants
    "SCHEMA_DIR",
    "SCALED_AMOUNT_SCHEMA",
    # Classes
    "ScaledAmountValidator",
    # Functions
    "load_schema",
    "validate_scaled_amount",
]
