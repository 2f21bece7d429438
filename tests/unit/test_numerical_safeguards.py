"""
Тесты для модуля Numerical Safeguards

Проверяет float-примитивы быстрого пути:
1. Валидацию float (NaN/Inf)
2. Абсолютное epsilon-сравнение
3. IEEE-754 совместимые pow/fmod/exp без исключений
"""

import math

import pytest

from tanum.core.math.numerical_safeguards import (
    EPS_DOUBLE_NUM,
    ieee_exp,
    ieee_fmod,
    ieee_pow,
    is_close_abs,
    is_valid_float,
)

# =============================================================================
# ТЕСТЫ ВАЛИДАЦИИ FLOAT
# =============================================================================


class TestIsValidFloat:
    """Тесты для is_valid_float"""

    def test_finite_values_valid(self) -> None:
        """Конечные значения валидны"""
        assert is_valid_float(0.0)
        assert is_valid_float(-1.5)
        assert is_valid_float(1.7976931348623157e308)

    def test_nan_and_inf_invalid(self) -> None:
        """NaN и бесконечности невалидны"""
        assert not is_valid_float(math.nan)
        assert not is_valid_float(math.inf)
        assert not is_valid_float(-math.inf)


# =============================================================================
# ТЕСТЫ EPSILON-СРАВНЕНИЯ
# =============================================================================


class TestIsCloseAbs:
    """Тесты для is_close_abs"""

    def test_default_epsilon(self) -> None:
        """Толерантность по умолчанию 1e-5"""
        assert EPS_DOUBLE_NUM == 1e-5

    def test_within_epsilon(self) -> None:
        """Разница меньше eps — значения близки"""
        assert is_close_abs(5.0, 5.000001)
        assert is_close_abs(-5.0, -5.000009)

    def test_outside_epsilon(self) -> None:
        """Разница больше eps — значения различны"""
        assert not is_close_abs(5.0, 5.0001)
        assert not is_close_abs(0.0, 1e-4)

    def test_custom_epsilon(self) -> None:
        """Пользовательская толерантность"""
        assert is_close_abs(1.0, 1.05, eps=0.1)
        assert not is_close_abs(1.0, 1.05, eps=0.01)

    def test_infinities(self) -> None:
        """Одинаковые бесконечности равны, inf против конечного нет"""
        assert is_close_abs(math.inf, math.inf)
        assert not is_close_abs(math.inf, -math.inf)
        assert not is_close_abs(math.inf, 1.0)

    def test_nan_never_close(self) -> None:
        assert not is_close_abs(math.nan, math.nan)

    def test_non_positive_epsilon_rejected(self) -> None:
        """eps <= 0 недопустим"""
        with pytest.raises(ValueError, match="eps must be positive"):
            is_close_abs(1.0, 1.0, eps=0.0)
        with pytest.raises(ValueError, match="eps must be positive"):
            is_close_abs(1.0, 1.0, eps=-1e-5)


# =============================================================================
# ТЕСТЫ IEEE-754 АРИФМЕТИКИ
# =============================================================================


class TestIeeePow:
    """Тесты для ieee_pow"""

    def test_regular_values(self) -> None:
        """Обычные значения совпадают с math.pow"""
        assert ieee_pow(2.0, 10.0) == 1024.0
        assert ieee_pow(4.0, 0.5) == 2.0
        assert ieee_pow(2.0, -1.0) == 0.5

    def test_overflow_gives_infinity(self) -> None:
        """Переполнение даёт inf вместо OverflowError"""
        assert ieee_pow(10.0, 400.0) == math.inf

    def test_overflow_sign_for_negative_base(self) -> None:
        """Отрицательное основание в нечётной степени даёт -inf"""
        assert ieee_pow(-10.0, 401.0) == -math.inf
        assert ieee_pow(-10.0, 400.0) == math.inf

    def test_zero_to_negative_power(self) -> None:
        """0 в отрицательной степени даёт inf"""
        assert ieee_pow(0.0, -1.0) == math.inf
        assert ieee_pow(-0.0, -1.0) == -math.inf
        assert ieee_pow(-0.0, -2.0) == math.inf

    def test_negative_base_fractional_exponent_is_nan(self) -> None:
        """Отрицательное основание с дробным показателем не определено"""
        assert math.isnan(ieee_pow(-8.0, 1.0 / 3.0))


class TestIeeeFmod:
    """Тесты для ieee_fmod"""

    def test_sign_of_dividend(self) -> None:
        """Остаток несёт знак делимого"""
        assert ieee_fmod(7.0, 3.0) == 1.0
        assert ieee_fmod(-7.0, 3.0) == -1.0
        assert ieee_fmod(7.0, -3.0) == 1.0

    def test_zero_divisor_is_nan(self) -> None:
        """Делитель 0 даёт nan вместо ValueError"""
        assert math.isnan(ieee_fmod(7.0, 0.0))

    def test_infinite_dividend_is_nan(self) -> None:
        """Бесконечное делимое даёт nan"""
        assert math.isnan(ieee_fmod(math.inf, 3.0))


class TestIeeeExp:
    """Тесты для ieee_exp"""

    def test_regular_values(self) -> None:
        assert ieee_exp(0.0) == 1.0
        assert ieee_exp(1.0) == pytest.approx(math.e)

    def test_overflow_gives_infinity(self) -> None:
        """Переполнение даёт inf вместо OverflowError"""
        assert ieee_exp(1000.0) == math.inf

    def test_underflow_gives_zero(self) -> None:
        assert ieee_exp(-1000.0) == 0.0
