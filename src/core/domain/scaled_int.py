"""
ScaledInt — nullable обёртка над scaled integer

Value type для границ сериализации: отличает "нет значения" (null)
от нуля, сериализуется в base-10 строку, хранилище берёт из пула
IntCellPool при десериализации.

ВНЕШНИЙ ФОРМАТ:
- вход: None | int | float | str ("123", "-5", "0xff", "" → null)
- выход: base-10 строка, null → None (никогда не "0" и не экспонента)

АРИФМЕТИКА С NULL (никогда не падает):
- add/sub: null как 0 (null - y = -y)
- mul/div: null операнд → 0
- div на 0 → 0; деление евклидово (остаток >= 0)
"""

import copy
import json
import math
from decimal import Decimal
from functools import total_ordering
from typing import Any, Final

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema

from src.core.domain.int_pool import SCALED_INT_POOL, IntCell
from src.core.math.integer_text import (
    format_integer_text,
    parse_integer_text,
    try_parse_decimal,
    try_parse_hex,
)
from src.core.math.precision_errors import InvalidTextError

# =============================================================================
# ГРАНИЦЫ MACHINE INTEGER
# =============================================================================

INT64_MIN: Final[int] = -(2**63)
INT64_MAX: Final[int] = 2**63 - 1
UINT64_MAX: Final[int] = 2**64 - 1

# Целые float в этом диапазоне конвертируются напрямую через int()
FLOAT_DIRECT_INT_LIMIT: Final[float] = 2.0**63

EXTERNAL_TEXT_PATTERN: Final[str] = r"^$|^[+-]?[0-9]+$|^0x[0-9a-fA-F]+$"


def _euclid_div(a: int, b: int) -> int:
    q = a // b
    if a - q * b < 0:
        q += 1
    return q


def _parse_external(raw: Any) -> int:
    if isinstance(raw, int):
        return raw

    if isinstance(raw, float):
        if not math.isfinite(raw):
            raise InvalidTextError(f"non-finite number is not a scaled integer: {raw}")
        if raw.is_integer() and -FLOAT_DIRECT_INT_LIMIT <= raw <= FLOAT_DIRECT_INT_LIMIT:
            return int(raw)
        text = format(Decimal(repr(raw)), "f")
        parsed = try_parse_decimal(text)
        if parsed is None:
            raise InvalidTextError(f"number is not an integer: {raw}")
        return parsed

    if isinstance(raw, str):
        parsed = try_parse_decimal(raw)
        if parsed is None:
            parsed = try_parse_hex(raw)
        if parsed is None:
            raise InvalidTextError(f"invalid scaled integer text: {raw!r}")
        return parsed

    raise InvalidTextError(f"unsupported scaled integer input type: {type(raw).__name__}")


@total_ordering
class ScaledInt:
    """
    Nullable scaled integer.

    Экземпляр владеет своей ячейкой IntCell; release() возвращает её в пул
    и переводит экземпляр в null. Экземпляры изменяемы (set/set_string),
    поэтому не хешируются.

    Examples:
        >>> ScaledInt(5) + ScaledInt()
        ScaledInt(5)
        >>> ScaledInt.from_external("0xff").to_external()
        '255'
        >>> ScaledInt.from_external("").is_null()
        True
    """

    __slots__ = ("_cell",)
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, value: int | None = None):
        self._cell: IntCell | None = None
        if value is not None:
            self._cell = IntCell(self._check_int(value))

    @staticmethod
    def _check_int(value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"ScaledInt value must be int, got {type(value).__name__}")
        return value

    def __copy__(self) -> "ScaledInt":
        # Ячейка никогда не разделяется между экземплярами
        return type(self)(self.value)

    def __deepcopy__(self, memo: dict[int, Any]) -> "ScaledInt":
        return self.__copy__()

    # =========================================================================
    # КОНСТРУКТОРЫ
    # =========================================================================

    @classmethod
    def from_int(cls, value: int | None) -> "ScaledInt":
        return cls(value)

    @classmethod
    def from_int64(cls, value: int) -> "ScaledInt":
        """Из знакового 64-битного целого."""
        if not INT64_MIN <= value <= INT64_MAX:
            raise ValueError(f"value {format_integer_text(value)} out of int64 range")
        return cls(value)

    @classmethod
    def from_uint64(cls, value: int) -> "ScaledInt":
        """Из беззнакового 64-битного целого."""
        if not 0 <= value <= UINT64_MAX:
            raise ValueError(f"value {format_integer_text(value)} out of uint64 range")
        return cls(value)

    @classmethod
    def from_string(cls, text: str, base: int = 10) -> "ScaledInt":
        """
        Из строки в base 10 или 16.

        Raises:
            InvalidTextError: Если строка не разбирается
        """
        return cls(parse_integer_text(text, base))

    @classmethod
    def from_external(cls, raw: Any) -> "ScaledInt":
        """
        Из JSON-подобного значения.

        Ячейка берётся из пула и возвращается в него на любом пути ошибки.

        Args:
            raw: None, int, float или str

        Returns:
            ScaledInt (null для None и пустой строки)

        Raises:
            InvalidTextError: bool, NaN/Inf, дробное число, неразбираемая
                строка или неподдерживаемый тип
        """
        if raw is None:
            return cls()
        if isinstance(raw, bool):
            raise InvalidTextError("boolean is not a scaled integer")
        if isinstance(raw, str):
            raw = raw.strip('"')
            if not raw:
                return cls()

        cell = SCALED_INT_POOL.acquire()
        try:
            cell.value = _parse_external(raw)
        except BaseException:
            SCALED_INT_POOL.release(cell)
            raise

        instance = cls()
        instance._cell = cell
        return instance

    @classmethod
    def from_json(cls, text: str | bytes) -> "ScaledInt":
        """Из JSON-документа (число, строка или null)."""
        return cls.from_external(json.loads(text))

    # =========================================================================
    # СОСТОЯНИЕ
    # =========================================================================

    @property
    def value(self) -> int | None:
        """Целое значение или None для null."""
        if self._cell is None:
            return None
        return self._cell.value

    def is_null(self) -> bool:
        return self._cell is None

    def set(self, value: int | None) -> "ScaledInt":
        """
        Присваивание значения.

        None освобождает ячейку (возврат в пул) и переводит экземпляр в null.
        """
        if value is None:
            self.release()
            return self
        value = self._check_int(value)
        if self._cell is None:
            self._cell = IntCell()
        self._cell.value = value
        return self

    def set_string(self, text: str, base: int = 10) -> "ScaledInt":
        """
        Присваивание из строки.

        Raises:
            InvalidTextError: Если строка не разбирается (значение не меняется)
        """
        return self.set(parse_integer_text(text, base))

    def release(self) -> None:
        """Возврат ячейки в пул; экземпляр становится null."""
        cell = self._cell
        if cell is None:
            return
        self._cell = None
        SCALED_INT_POOL.release(cell)

    def sign(self) -> int:
        """-1, 0 или +1; null → 0."""
        value = self.value
        if value is None:
            return 0
        return (value > 0) - (value < 0)

    def int64(self) -> int:
        """Младшие 64 бита как знаковое целое; null → 0."""
        value = self.value
        if value is None:
            return 0
        return ((value - INT64_MIN) & UINT64_MAX) + INT64_MIN

    def uint64(self) -> int:
        """Младшие 64 бита модуля; null → 0."""
        value = self.value
        if value is None:
            return 0
        return abs(value) & UINT64_MAX

    # =========================================================================
    # СРАВНЕНИЕ
    # =========================================================================

    def cmp(self, other: "ScaledInt") -> int:
        """
        Сравнение: -1, 0, +1.

        null меньше любого значения (включая 0), null == null.
        """
        a, b = self.value, other.value
        if a is None:
            return 0 if b is None else -1
        if b is None:
            return 1
        return (a > b) - (a < b)

    @classmethod
    def _coerce(cls, other: Any) -> "ScaledInt | None":
        if isinstance(other, ScaledInt):
            return other
        if isinstance(other, int) and not isinstance(other, bool):
            return cls(other)
        return None

    def __eq__(self, other: object) -> bool:
        coerced = self._coerce(other)
        if coerced is None:
            return NotImplemented
        return self.cmp(coerced) == 0

    def __lt__(self, other: object) -> bool:
        coerced = self._coerce(other)
        if coerced is None:
            return NotImplemented
        return self.cmp(coerced) < 0

    # =========================================================================
    # АРИФМЕТИКА
    # =========================================================================

    def add(self, other: "ScaledInt") -> "ScaledInt":
        a, b = self.value, other.value
        if a is None:
            return ScaledInt(0 if b is None else b)
        if b is None:
            return ScaledInt(a)
        return ScaledInt(a + b)

    def sub(self, other: "ScaledInt") -> "ScaledInt":
        a, b = self.value, other.value
        if a is None:
            return ScaledInt(0 if b is None else -b)
        if b is None:
            return ScaledInt(a)
        return ScaledInt(a - b)

    def mul(self, other: "ScaledInt") -> "ScaledInt":
        a, b = self.value, other.value
        if a is None or b is None:
            return ScaledInt(0)
        return ScaledInt(a * b)

    def div(self, other: "ScaledInt") -> "ScaledInt":
        a, b = self.value, other.value
        if a is None or b is None or b == 0:
            return ScaledInt(0)
        return ScaledInt(_euclid_div(a, b))

    def __add__(self, other: Any) -> "ScaledInt":
        coerced = self._coerce(other)
        if coerced is None:
            return NotImplemented
        return self.add(coerced)

    def __sub__(self, other: Any) -> "ScaledInt":
        coerced = self._coerce(other)
        if coerced is None:
            return NotImplemented
        return self.sub(coerced)

    def __mul__(self, other: Any) -> "ScaledInt":
        coerced = self._coerce(other)
        if coerced is None:
            return NotImplemented
        return self.mul(coerced)

    def __floordiv__(self, other: Any) -> "ScaledInt":
        coerced = self._coerce(other)
        if coerced is None:
            return NotImplemented
        return self.div(coerced)

    # =========================================================================
    # СЕРИАЛИЗАЦИЯ
    # =========================================================================

    def to_external(self) -> str | None:
        """Base-10 строка; null → None."""
        value = self.value
        if value is None:
            return None
        return format_integer_text(value)

    def to_json(self) -> str:
        return json.dumps(self.to_external())

    def __str__(self) -> str:
        external = self.to_external()
        return "null" if external is None else external

    def __repr__(self) -> str:
        return f"ScaledInt({self.to_external()})"

    @classmethod
    def _validate(cls, raw: Any) -> "ScaledInt":
        if isinstance(raw, cls):
            # Модель получает собственную копию: release/set вызывающего её не меняют
            return copy.copy(raw)
        return cls.from_external(raw)

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                cls.to_external, when_used="always"
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, _core_schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        return {
            "anyOf": [
                {"type": "string", "pattern": EXTERNAL_TEXT_PATTERN},
                {"type": "integer"},
                {"type": "null"},
            ]
        }
