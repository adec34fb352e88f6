"""
Scaled Amount Contract

Проверка внешнего представления суммы против JSON Schema
contracts/schema/scaled_amount.json (Draft 2020-12).

Через этот модуль проходят ScaledAmount.to_contract() и
ScaledAmount.from_contract(): документ, выпущенный моделью, и документ,
принятый ею, проверяются одной и той же схемой.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Final, Mapping

from jsonschema import Draft202012Validator, SchemaError
from jsonschema.exceptions import best_match

# Корень проекта: src/core/contracts/validators.py → 3 уровня вверх
SCHEMA_DIR: Final[Path] = Path(__file__).resolve().parents[3] / "contracts" / "schema"

SCALED_AMOUNT_SCHEMA: Final[str] = "scaled_amount"


@lru_cache(maxsize=None)
def load_schema(schema_name: str) -> dict[str, Any]:
    """
    Загрузка и meta-validation JSON Schema.

    Результат кэшируется: повторный вызов возвращает тот же объект.

    Args:
        schema_name: Имя схемы без расширения (например, 'scaled_amount')

    Returns:
        Схема как dict

    Raises:
        FileNotFoundError: Если файл схемы не найден
        ValueError: Если схема не проходит meta-validation
    """
    schema_path = SCHEMA_DIR / f"{schema_name}.json"
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema not found: {schema_path}")

    with open(schema_path, "r", encoding="utf-8") as f:
        schema = json.load(f)

    try:
        Draft202012Validator.check_schema(schema)
    except SchemaError as e:
        raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

    return schema


class ScaledAmountValidator:
    """
    Валидатор документа {"value": ..., "decimals": ...}.

    При нескольких нарушениях поднимается наиболее релевантное
    (jsonschema best_match), а не первое найденное.
    """

    def __init__(self) -> None:
        self._validator = Draft202012Validator(load_schema(SCALED_AMOUNT_SCHEMA))

    def validate(self, document: Mapping[str, Any]) -> None:
        """
        Raises:
            jsonschema.ValidationError: Если документ нарушает контракт
        """
        error = best_match(self._validator.iter_errors(document))
        if error is not None:
            raise error

    def is_valid(self, document: Mapping[str, Any]) -> bool:
        return self._validator.is_valid(document)


@lru_cache(maxsize=1)
def _default_validator() -> ScaledAmountValidator:
    return ScaledAmountValidator()


def validate_scaled_amount(document: Mapping[str, Any]) -> None:
    """
    Валидация scaled_amount документа.

    Args:
        document: Внешнее представление суммы

    Raises:
        jsonschema.ValidationError: Если документ не соответствует схеме
    """
    _default_validator().validate(document)
