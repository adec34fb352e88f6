"""
Тесты для ScaledInt

Проверяет:
1. Конструкторы (int, int64, uint64, строки base 10/16)
2. Разбор внешнего JSON-подобного формата
3. Сериализацию (base-10 строка, null → null)
4. Арифметику и сравнение с null-операндами
5. Жизненный цикл ячейки (release, set(None))
6. Интеграцию с Pydantic
"""

import copy
import json

import pytest
from pydantic import BaseModel, ValidationError

from src.core.domain.scaled_int import INT64_MAX, INT64_MIN, UINT64_MAX, ScaledInt
from src.core.math.precision_errors import InvalidTextError

# =============================================================================
# КОНСТРУКТОРЫ
# =============================================================================


class TestConstruction:
    """Тесты конструкторов"""

    def test_default_is_null(self) -> None:
        value = ScaledInt()
        assert value.is_null()
        assert value.value is None

    def test_zero_is_not_null(self) -> None:
        """Ноль и null различаются"""
        value = ScaledInt(0)
        assert not value.is_null()
        assert value.value == 0
        assert value != ScaledInt()

    def test_from_int(self) -> None:
        assert ScaledInt.from_int(10**30).value == 10**30
        assert ScaledInt.from_int(None).is_null()

    def test_rejects_non_int(self) -> None:
        with pytest.raises(TypeError):
            ScaledInt(1.5)  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            ScaledInt(True)

    def test_from_int64(self) -> None:
        assert ScaledInt.from_int64(INT64_MIN).value == INT64_MIN
        assert ScaledInt.from_int64(INT64_MAX).value == INT64_MAX
        with pytest.raises(ValueError, match="out of int64 range"):
            ScaledInt.from_int64(INT64_MAX + 1)

    def test_from_uint64(self) -> None:
        assert ScaledInt.from_uint64(UINT64_MAX).value == UINT64_MAX
        with pytest.raises(ValueError, match="out of uint64 range"):
            ScaledInt.from_uint64(-1)

    def test_from_string_decimal(self) -> None:
        assert ScaledInt.from_string("123456789012345678901234567890").value == (
            123456789012345678901234567890
        )
        assert ScaledInt.from_string("-42").value == -42

    def test_from_string_hex(self) -> None:
        assert ScaledInt.from_string("ff", base=16).value == 255
        assert ScaledInt.from_string("0xff", base=16).value == 255

    def test_from_string_invalid(self) -> None:
        with pytest.raises(InvalidTextError):
            ScaledInt.from_string("12a")
        with pytest.raises(InvalidTextError):
            ScaledInt.from_string("")


# =============================================================================
# ВНЕШНИЙ ФОРМАТ
# =============================================================================


class TestFromExternal:
    """Тесты для from_external / from_json"""

    def test_none_is_null(self) -> None:
        assert ScaledInt.from_external(None).is_null()

    def test_empty_string_is_null(self) -> None:
        assert ScaledInt.from_external("").is_null()
        assert ScaledInt.from_external('""').is_null()

    def test_int(self) -> None:
        assert ScaledInt.from_external(12345678901234567890123).value == 12345678901234567890123

    def test_integral_float(self) -> None:
        assert ScaledInt.from_external(1e18).value == 10**18
        assert ScaledInt.from_external(-5.0).value == -5

    def test_large_float_via_text(self) -> None:
        """Целые float вне int64 идут через десятичный текст"""
        assert ScaledInt.from_external(1e20).value == 10**20

    def test_fractional_float_rejected(self) -> None:
        with pytest.raises(InvalidTextError):
            ScaledInt.from_external(1.5)

    @pytest.mark.parametrize("raw", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_rejected(self, raw: float) -> None:
        with pytest.raises(InvalidTextError):
            ScaledInt.from_external(raw)

    def test_decimal_string(self) -> None:
        assert ScaledInt.from_external("1500000000000000000").value == 1500000000000000000

    def test_quoted_string(self) -> None:
        assert ScaledInt.from_external('"42"').value == 42

    def test_hex_string(self) -> None:
        assert ScaledInt.from_external("0xde0b6b3a7640000").value == 10**18

    @pytest.mark.parametrize("raw", ["abc", "0x", "0xZZ", "1.5", "1e18", " 1"])
    def test_invalid_string_rejected(self, raw: str) -> None:
        with pytest.raises(InvalidTextError):
            ScaledInt.from_external(raw)

    @pytest.mark.parametrize("raw", [True, False, [1], {"v": 1}])
    def test_unsupported_types_rejected(self, raw: object) -> None:
        with pytest.raises(InvalidTextError):
            ScaledInt.from_external(raw)

    def test_from_json(self) -> None:
        assert ScaledInt.from_json('"123"').value == 123
        assert ScaledInt.from_json("123").value == 123
        assert ScaledInt.from_json("null").is_null()
        assert ScaledInt.from_json('""').is_null()


class TestSerialization:
    """Тесты сериализации"""

    def test_to_external(self) -> None:
        assert ScaledInt(10**30).to_external() == "1" + "0" * 30
        assert ScaledInt().to_external() is None

    def test_to_json(self) -> None:
        """Всегда строка, null → null"""
        assert ScaledInt(123).to_json() == '"123"'
        assert ScaledInt().to_json() == "null"

    def test_number_input_serialized_as_string(self) -> None:
        assert ScaledInt.from_external(1e20).to_json() == '"100000000000000000000"'

    def test_str_and_repr(self) -> None:
        assert str(ScaledInt(-7)) == "-7"
        assert str(ScaledInt()) == "null"
        assert repr(ScaledInt(5)) == "ScaledInt(5)"
        assert repr(ScaledInt()) == "ScaledInt(None)"

    def test_json_round_trip(self) -> None:
        original = ScaledInt(98765432109876543210)
        assert ScaledInt.from_json(original.to_json()) == original


# =============================================================================
# СОСТОЯНИЕ И ЗАПРОСЫ
# =============================================================================


class TestState:
    """Тесты set/set_string/release/sign/int64/uint64"""

    def test_set(self) -> None:
        value = ScaledInt()
        value.set(42)
        assert value.value == 42

    def test_set_none_releases(self) -> None:
        value = ScaledInt(42)
        value.set(None)
        assert value.is_null()

    def test_set_string(self) -> None:
        value = ScaledInt(1)
        value.set_string("0x10", base=16)
        assert value.value == 16

    def test_set_string_invalid_keeps_value(self) -> None:
        value = ScaledInt(1)
        with pytest.raises(InvalidTextError):
            value.set_string("nope")
        assert value.value == 1

    def test_release(self) -> None:
        value = ScaledInt.from_external("42")
        value.release()
        assert value.is_null()
        value.release()
        assert value.is_null()

    def test_sign(self) -> None:
        assert ScaledInt(5).sign() == 1
        assert ScaledInt(-5).sign() == -1
        assert ScaledInt(0).sign() == 0
        assert ScaledInt().sign() == 0

    def test_int64(self) -> None:
        assert ScaledInt(42).int64() == 42
        assert ScaledInt(-42).int64() == -42
        assert ScaledInt(2**63).int64() == INT64_MIN
        assert ScaledInt().int64() == 0

    def test_uint64(self) -> None:
        assert ScaledInt(42).uint64() == 42
        assert ScaledInt(2**64 + 3).uint64() == 3
        assert ScaledInt().uint64() == 0

    def test_unhashable(self) -> None:
        with pytest.raises(TypeError):
            hash(ScaledInt(1))

    @pytest.mark.parametrize("copier", [copy.copy, copy.deepcopy])
    def test_copy_owns_separate_cell(self, copier) -> None:
        """Копия не разделяет ячейку с оригиналом"""
        original = ScaledInt.from_external("42")
        duplicate = copier(original)

        original.release()
        assert duplicate.value == 42

        duplicate.set(7)
        assert original.is_null()

    def test_copy_of_null(self) -> None:
        assert copy.copy(ScaledInt()).is_null()


# =============================================================================
# ЗНАЧЕНИЯ ВНЕ ЛИМИТА int ↔ str
# =============================================================================

# Больше sys.get_int_max_str_digits() по умолчанию (4300)
HUGE_DIGITS = 5000


class TestHugeValues:
    """Разбор и сериализация значений длиннее лимита int ↔ str"""

    def test_from_external_long_decimal(self) -> None:
        value = ScaledInt.from_external("1" * HUGE_DIGITS)
        assert value.value == (10**HUGE_DIGITS - 1) // 9

    def test_from_string_long_decimal(self) -> None:
        value = ScaledInt.from_string("-" + "9" * HUGE_DIGITS)
        assert value.value == -(10**HUGE_DIGITS - 1)

    def test_long_invalid_text_rejected(self) -> None:
        with pytest.raises(InvalidTextError):
            ScaledInt.from_external("1" * HUGE_DIGITS + "x")

    def test_to_external(self) -> None:
        assert ScaledInt(10**HUGE_DIGITS).to_external() == "1" + "0" * HUGE_DIGITS

    def test_to_json_round_trip(self) -> None:
        original = ScaledInt(10**HUGE_DIGITS + 3)
        assert ScaledInt.from_json(original.to_json()) == original

    def test_repr(self) -> None:
        assert repr(ScaledInt(-(10**HUGE_DIGITS))) == f"ScaledInt(-1{'0' * HUGE_DIGITS})"

    def test_pydantic_dump(self) -> None:
        model = _Balance(amount=ScaledInt(10**HUGE_DIGITS))
        assert model.model_dump() == {"amount": "1" + "0" * HUGE_DIGITS}

    def test_from_int64_message(self) -> None:
        with pytest.raises(ValueError, match="out of int64 range"):
            ScaledInt.from_int64(10**HUGE_DIGITS)


# =============================================================================
# СРАВНЕНИЕ И АРИФМЕТИКА
# =============================================================================


class TestComparison:
    """Тесты cmp и операторов сравнения"""

    def test_cmp(self) -> None:
        assert ScaledInt(1).cmp(ScaledInt(2)) == -1
        assert ScaledInt(2).cmp(ScaledInt(1)) == 1
        assert ScaledInt(2).cmp(ScaledInt(2)) == 0

    def test_null_ordering(self) -> None:
        """null меньше любого значения, включая 0"""
        assert ScaledInt().cmp(ScaledInt()) == 0
        assert ScaledInt().cmp(ScaledInt(0)) == -1
        assert ScaledInt(0).cmp(ScaledInt()) == 1
        assert ScaledInt() < ScaledInt(-(10**30))

    def test_operators(self) -> None:
        assert ScaledInt(1) < ScaledInt(2)
        assert ScaledInt(2) >= ScaledInt(2)
        assert ScaledInt(3) == 3
        assert ScaledInt(3) > 2


class TestArithmetic:
    """Тесты арифметики с null-операндами"""

    def test_add(self) -> None:
        assert (ScaledInt(2) + ScaledInt(3)).value == 5
        assert (ScaledInt() + ScaledInt(3)).value == 3
        assert (ScaledInt(2) + ScaledInt()).value == 2
        assert (ScaledInt() + ScaledInt()).value == 0

    def test_sub(self) -> None:
        assert (ScaledInt(5) - ScaledInt(3)).value == 2
        assert (ScaledInt() - ScaledInt(3)).value == -3
        assert (ScaledInt(5) - ScaledInt()).value == 5
        assert (ScaledInt() - ScaledInt()).value == 0

    def test_mul(self) -> None:
        assert (ScaledInt(10**18) * ScaledInt(10**18)).value == 10**36
        assert (ScaledInt() * ScaledInt(3)).value == 0
        assert (ScaledInt(3) * ScaledInt()).value == 0

    def test_div(self) -> None:
        assert (ScaledInt(7) // ScaledInt(2)).value == 3
        assert (ScaledInt(7) // ScaledInt(0)).value == 0
        assert (ScaledInt() // ScaledInt(2)).value == 0
        assert (ScaledInt(7) // ScaledInt()).value == 0

    def test_div_euclidean(self) -> None:
        """Остаток всегда неотрицательный"""
        assert ScaledInt(-7).div(ScaledInt(2)).value == -4
        assert ScaledInt(7).div(ScaledInt(-2)).value == -3
        assert ScaledInt(-7).div(ScaledInt(-2)).value == 4

    def test_int_operands(self) -> None:
        assert (ScaledInt(2) + 3).value == 5
        assert (ScaledInt(10) // 3).value == 3

    def test_operands_unchanged(self) -> None:
        a, b = ScaledInt(2), ScaledInt(3)
        _ = a + b
        assert a.value == 2
        assert b.value == 3


# =============================================================================
# PYDANTIC
# =============================================================================


class _Balance(BaseModel):
    amount: ScaledInt


class TestPydanticIntegration:
    """Тесты интеграции с Pydantic"""

    def test_validate_from_string(self) -> None:
        model = _Balance.model_validate({"amount": "1500000000000000000"})
        assert model.amount.value == 1500000000000000000

    def test_validate_from_null(self) -> None:
        model = _Balance.model_validate({"amount": None})
        assert model.amount.is_null()

    def test_validate_instance_copied(self) -> None:
        """Модель хранит собственную копию переданного экземпляра"""
        amount = ScaledInt(5)
        model = _Balance(amount=amount)

        assert model.amount == amount
        assert model.amount is not amount

        amount.set(7)
        amount.release()
        assert model.amount.value == 5

    def test_invalid_raises_validation_error(self) -> None:
        with pytest.raises(ValidationError):
            _Balance.model_validate({"amount": "abc"})
        with pytest.raises(ValidationError):
            _Balance.model_validate({"amount": 1.5})

    def test_dump_as_string(self) -> None:
        model = _Balance.model_validate({"amount": 10**20})
        assert model.model_dump() == {"amount": "100000000000000000000"}
        assert json.loads(model.model_dump_json()) == {"amount": "100000000000000000000"}

    def test_dump_null(self) -> None:
        model = _Balance.model_validate({"amount": None})
        assert json.loads(model.model_dump_json()) == {"amount": None}
