"""
ScaledAmount — сумма в scaled integer с масштабом

Immutable Pydantic модель для границ сериализации:
{"value": "<base-10>" | "0x..." | number | null, "decimals": int}

to_contract() и from_contract() проверяют документ по схеме
contracts/schema/scaled_amount.json.
"""

from typing import Any, Mapping

from pydantic import BaseModel, Field

from src.core.contracts.validators import validate_scaled_amount
from src.core.domain.scaled_int import ScaledInt
from src.core.math.decimal_bridge import float_to_scaled
from src.core.math.display_format import format_scaled
from src.core.math.float_boundary import scaled_to_float, validate_display_amount
from src.core.math.native_units import (
    NATIVE_UNITS_EXPONENT,
    ConversionMode,
    display_to_natural_units,
    natural_units_to_display,
)


class ScaledAmount(BaseModel):
    """
    Сумма в scaled integer.

    value сериализуется как base-10 строка (null сохраняется как null),
    чтобы потребители с ограниченной точностью чисел не теряли разряды.
    """

    value: ScaledInt = Field(..., description="Scaled integer (null — значение отсутствует)")
    decimals: int = Field(
        NATIVE_UNITS_EXPONENT, ge=0, description="Масштаб: количество десятичных знаков"
    )

    model_config = {"frozen": True}  # Immutable

    def to_display(self, mode: ConversionMode = ConversionMode.BALANCED) -> float:
        """
        Конверсия в display amount.

        Для decimals=18 применяется политика mode, для остальных масштабов —
        Balanced через Decimal.

        Raises:
            NullInputError: value is null
            NegativeInputError: value < 0
            PrecisionLossError: потеря точности при сужении до float
        """
        if self.decimals == NATIVE_UNITS_EXPONENT:
            return natural_units_to_display(self.value.value, mode)
        return scaled_to_float(self.value.value, self.decimals)

    def to_text(self, digits: int) -> str:
        """Строка для отображения с digits знаками (см. format_scaled)."""
        return format_scaled(self.value.value, self.decimals, digits)

    @classmethod
    def from_display(
        cls,
        amount: float,
        decimals: int = NATIVE_UNITS_EXPONENT,
        mode: ConversionMode = ConversionMode.BALANCED,
    ) -> "ScaledAmount":
        """
        Создание из display amount.

        Raises:
            PrecisionLossError: amount NaN/Inf
            NegativeInputError: amount < 0
        """
        if decimals == NATIVE_UNITS_EXPONENT:
            scaled = display_to_natural_units(amount, mode)
        else:
            scaled = float_to_scaled(validate_display_amount(amount), decimals)
        return cls(value=ScaledInt(scaled), decimals=decimals)

    # =========================================================================
    # КОНТРАКТ scaled_amount
    # =========================================================================

    def to_contract(self) -> dict[str, Any]:
        """
        Внешнее представление, проверенное по контракту scaled_amount.

        Raises:
            jsonschema.ValidationError: Если дамп нарушает контракт
        """
        document = self.model_dump()
        validate_scaled_amount(document)
        return document

    @classmethod
    def from_contract(cls, document: Mapping[str, Any]) -> "ScaledAmount":
        """
        Создание из внешнего документа.

        Документ сначала проверяется по схеме, затем разбирается моделью.

        Raises:
            jsonschema.ValidationError: Документ нарушает контракт
            pydantic.ValidationError: Значение не разбирается моделью
        """
        validate_scaled_amount(document)
        return cls.model_validate(document)
