"""
Тесты для модуля Display Format

Проверяет:
1. Округление до заданного количества знаков
2. Удаление хвостовых нулей и формат "X.0"
3. Ограничение количества знаков (100)
4. None / отрицательные значения → "0"
"""

import pytest

from src.core.math.display_format import FORMAT_MAX_DIGITS, format_scaled


class TestFormatScaled:
    """Тесты для format_scaled"""

    def test_eight_digits(self) -> None:
        assert format_scaled(1234567890000000000, 18, 8) == "1.23456789"

    def test_rounds_half_even(self) -> None:
        """0.123456789 до 8 знаков → 0.12345679"""
        assert format_scaled(12345678900000, 14, 8) == "0.12345679"

    def test_two_digits_stablecoin(self) -> None:
        assert format_scaled(1234567, 6, 2) == "1.23"

    def test_zero_keeps_single_fraction_digit(self) -> None:
        """Ноль → "0.0", не "0." """
        assert format_scaled(0, 18, 8) == "0.0"

    def test_whole_value_keeps_single_fraction_digit(self) -> None:
        assert format_scaled(10**18, 18, 8) == "1.0"

    def test_zero_digits(self) -> None:
        """Без дробной части точка не добавляется"""
        assert format_scaled(1234567890000000000, 18, 0) == "1"

    def test_more_digits_than_scale_is_exact(self) -> None:
        """Лишние знаки не вносят шума"""
        assert format_scaled(1234567890000000000, 18, 20) == "1.23456789"

    def test_negative_digits_shortest(self) -> None:
        """digits < 0 → кратчайшее точное представление"""
        assert format_scaled(1234567890000000000, 18, -5) == "1.23456789"
        assert format_scaled(1, 18, -1) == "0.000000000000000001"

    def test_large_value_no_exponent(self) -> None:
        """Никакой экспоненциальной записи"""
        assert format_scaled(10**40, 18, 2) == "10000000000000000000000.0"

    def test_none(self) -> None:
        assert format_scaled(None, 18, 8) == "0"

    def test_negative_value(self) -> None:
        assert format_scaled(-123, 18, 8) == "0"

    @pytest.mark.parametrize("digits", [101, 200, 10_000])
    def test_digits_clamped(self, digits: int) -> None:
        """d > 100 эквивалентно d = 100"""
        value = 12345678900000
        assert format_scaled(value, 14, digits) == format_scaled(value, 14, FORMAT_MAX_DIGITS)

    def test_max_digits_value(self) -> None:
        assert FORMAT_MAX_DIGITS == 100
