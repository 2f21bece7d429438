"""
Тесты для модуля Decimal Algorithms

Проверяет итеративные алгоритмы произвольной точности:
1. Seed корня из научной нотации
2. Метод Герона (сходимость, эталонные значения)
3. Логарифм цепной дробью и экспоненту рядом Тейлора
4. Целые и вещественные степени (разложение показателя)
"""

import math
from decimal import Decimal

import pytest

from tanum.core.math.decimal_algorithms import (
    LOG_SERIES_ITERATIONS,
    babylonian_sqrt,
    continued_fraction_log,
    integral_power,
    scientific_split,
    split_power,
    sqrt_seed,
    taylor_exp,
)
from tanum.core.num.settings import math_context

CONTEXT_32 = math_context(32)


# =============================================================================
# ТЕСТЫ SEED КОРНЯ
# =============================================================================


class TestScientificSplit:
    """Тесты для scientific_split"""

    def test_large_value(self) -> None:
        assert scientific_split(Decimal("300000000000")) == (Decimal("3.0"), 11)

    def test_rounding_carries_into_exponent(self) -> None:
        """0.0996 округляется до 1.0e-1"""
        assert scientific_split(Decimal("0.0996")) == (Decimal("1.0"), -1)

    def test_two_significant_digits(self) -> None:
        """Мантисса округляется HALF_UP до двух цифр"""
        mantissa, exponent = scientific_split(Decimal("1.25"))
        assert mantissa == Decimal("1.3")
        assert exponent == 0

    def test_exponent_beyond_default_context_range(self) -> None:
        """Порядок за пределами ±999999 не вызывает decimal.Overflow"""
        assert scientific_split(Decimal("1E+1000000")) == (Decimal("1.0"), 1000000)
        assert scientific_split(Decimal("4E-1000000")) == (Decimal("4.0"), -1000000)


class TestSqrtSeed:
    """Тесты для sqrt_seed"""

    def test_small_even_exponent(self) -> None:
        """Мантисса < 10 даёт seed-мантиссу 2"""
        assert sqrt_seed(Decimal(2)) == Decimal(2)
        assert sqrt_seed(Decimal("0.05")) == Decimal("0.2")

    def test_odd_exponent_made_even(self) -> None:
        """3e11 -> 30e10, seed = 6 * 10^5"""
        assert sqrt_seed(Decimal("3E+11")) == Decimal(600000)

    def test_negative_odd_exponent(self) -> None:
        """0.5 = 5e-1 -> 50e-2, seed = 6 * 10^-1"""
        assert sqrt_seed(Decimal("0.5")) == Decimal("0.6")

    def test_seed_within_order_of_root(self) -> None:
        """Seed отличается от корня не более чем в 10 раз"""
        for text in ("7", "123.45", "0.000321", "9.9E+99", "1E-50"):
            value = Decimal(text)
            ratio = sqrt_seed(value) / value.sqrt()
            assert Decimal("0.1") < ratio < Decimal(10)


# =============================================================================
# ТЕСТЫ МЕТОДА ГЕРОНА
# =============================================================================


class TestBabylonianSqrt:
    """Тесты для babylonian_sqrt"""

    def test_exact_square(self) -> None:
        assert babylonian_sqrt(Decimal(4), CONTEXT_32) == Decimal(2)
        assert babylonian_sqrt(Decimal("0.0625"), CONTEXT_32) == Decimal("0.25")

    def test_large_value_default_precision(self) -> None:
        """√3e11 на 32 цифрах"""
        result = babylonian_sqrt(Decimal("3E+11"), CONTEXT_32)
        expected = Decimal("547722.55750516611345696978280080")
        assert abs(result - expected) <= Decimal("1E-26")

    def test_precision_of_result(self) -> None:
        """Результат сходится на точности контекста"""
        result = babylonian_sqrt(Decimal(2), math_context(50))
        assert str(result).startswith("1.41421356237309504880168872420969807856967187537")

    def test_agrees_with_decimal_sqrt(self) -> None:
        """Совпадает с Decimal.sqrt на той же точности (до последней цифры)"""
        context = math_context(40)
        for text in ("2", "1.2", "10", "0.001", "98765.4321"):
            value = Decimal(text)
            result = babylonian_sqrt(value, context)
            reference = context.sqrt(value)
            assert abs(result - reference) <= reference.scaleb(-38)

    def test_huge_exponent(self) -> None:
        assert babylonian_sqrt(Decimal("1E+1000000"), CONTEXT_32) == Decimal("1E+500000")
        assert babylonian_sqrt(Decimal("4E-1000000"), CONTEXT_32) == Decimal("2E-500000")

    def test_non_positive_rejected(self) -> None:
        """v <= 0 недопустим: домен отсекается вызывающей стороной"""
        with pytest.raises(ValueError, match="must be positive"):
            babylonian_sqrt(Decimal(0), CONTEXT_32)
        with pytest.raises(ValueError, match="must be positive"):
            babylonian_sqrt(Decimal(-4), CONTEXT_32)


# =============================================================================
# ТЕСТЫ ЛОГАРИФМА И ЭКСПОНЕНТЫ
# =============================================================================


class TestContinuedFractionLog:
    """Тесты для continued_fraction_log"""

    def test_fixed_iteration_count(self) -> None:
        assert LOG_SERIES_ITERATIONS == 1000

    def test_log_of_one_is_zero(self) -> None:
        assert continued_fraction_log(Decimal(1), CONTEXT_32) == 0

    @pytest.mark.parametrize("value", ["2", "0.5", "10", "1.05", "123.456"])
    def test_matches_math_log(self, value: str) -> None:
        """Совпадает с math.log на точности double"""
        result = continued_fraction_log(Decimal(value), CONTEXT_32)
        assert float(result) == pytest.approx(math.log(float(value)), rel=1e-12, abs=1e-15)

    def test_high_precision_near_one(self) -> None:
        """Вблизи 1 дробь сходится на полную рабочую точность"""
        context = math_context(40)
        result = continued_fraction_log(Decimal("1.1"), context)
        assert abs(result - context.ln(Decimal("1.1"))) <= Decimal("1E-37")

    def test_non_positive_rejected(self) -> None:
        with pytest.raises(ValueError, match="must be positive"):
            continued_fraction_log(Decimal(0), CONTEXT_32)


class TestTaylorExp:
    """Тесты для taylor_exp"""

    def test_exp_of_zero(self) -> None:
        assert taylor_exp(Decimal(0), CONTEXT_32) == 1

    @pytest.mark.parametrize("value", ["1", "-1", "2.5", "0.001", "-3"])
    def test_matches_math_exp(self, value: str) -> None:
        result = taylor_exp(Decimal(value), CONTEXT_32)
        assert float(result) == pytest.approx(math.exp(float(value)), rel=1e-12)

    @pytest.mark.parametrize("value", ["-50", "-100", "-700"])
    def test_large_negative_argument(self, value: str) -> None:
        """Знакопеременный ряд не теряет знак и значащие цифры"""
        result = taylor_exp(Decimal(value), CONTEXT_32)
        assert result > 0
        assert float(result) == pytest.approx(math.exp(float(value)), rel=1e-12)

    def test_negative_is_reciprocal(self) -> None:
        context = math_context(40)
        result = taylor_exp(Decimal(-20), context)
        assert abs(result - context.exp(Decimal(-20))) <= context.exp(Decimal(-20)).scaleb(-37)

    def test_high_precision(self) -> None:
        context = math_context(40)
        result = taylor_exp(Decimal(1), context)
        assert abs(result - context.exp(Decimal(1))) <= Decimal("1E-37")


# =============================================================================
# ТЕСТЫ СТЕПЕНЕЙ
# =============================================================================


class TestIntegralPower:
    """Тесты для integral_power"""

    def test_positive_exponent(self) -> None:
        assert integral_power(Decimal("0.2"), 5, CONTEXT_32) == Decimal("0.00032")

    def test_negative_exponent(self) -> None:
        assert integral_power(Decimal(2), -2, CONTEXT_32) == Decimal("0.25")

    def test_zero_exponent(self) -> None:
        """x^0 = 1 для любого x, включая 0"""
        assert integral_power(Decimal(0), 0, CONTEXT_32) == 1
        assert integral_power(Decimal("-7.5"), 0, CONTEXT_32) == 1

    def test_zero_to_negative_power_raises(self) -> None:
        with pytest.raises(ZeroDivisionError):
            integral_power(Decimal(0), -1, CONTEXT_32)

    def test_rounded_to_context(self) -> None:
        result = integral_power(Decimal("1.1"), 100, math_context(10))
        assert len(result.as_tuple().digits) <= 10


class TestSplitPower:
    """Тесты для split_power"""

    def test_fractional_exponent(self) -> None:
        """x^0.2: целая часть 0, дробная через float pow"""
        result = split_power(Decimal("0.2"), Decimal("0.2"), CONTEXT_32)
        assert float(result) == pytest.approx(0.7247796636776955, rel=1e-15)

    def test_negative_fractional_exponent(self) -> None:
        """Остаток несёт знак показателя: -0.2 = 0 + (-0.2)"""
        result = split_power(Decimal("0.2"), Decimal("-0.2"), CONTEXT_32)
        assert float(result) == pytest.approx(1.37972966146, rel=1e-11)

    def test_mixed_exponent(self) -> None:
        """2^2.5 = 2^2 * 2^0.5"""
        result = split_power(Decimal(2), Decimal("2.5"), CONTEXT_32)
        assert float(result) == pytest.approx(2 ** 2.5, rel=1e-15)

    def test_integral_exponent_is_exact(self) -> None:
        result = split_power(Decimal("0.2"), Decimal(5), CONTEXT_32)
        assert result == Decimal("0.00032")

    def test_negative_base_integral_exponent(self) -> None:
        result = split_power(Decimal(-2), Decimal(3), CONTEXT_32)
        assert result == Decimal(-8)

    def test_undefined_results(self) -> None:
        """0 в отрицательной степени и (-x)^дробное не определены"""
        assert split_power(Decimal(0), Decimal(-1), CONTEXT_32) is None
        assert split_power(Decimal(0), Decimal("-0.5"), CONTEXT_32) is None
        assert split_power(Decimal(-2), Decimal("0.5"), CONTEXT_32) is None

    def test_integer_part_overflow(self) -> None:
        """Целая часть показателя вне int32"""
        with pytest.raises(OverflowError, match="overflows int32"):
            split_power(Decimal(2), Decimal("1E+20"), CONTEXT_32)
        with pytest.raises(OverflowError, match="overflows int32"):
            split_power(Decimal(2), Decimal(-(2**31) - 1), CONTEXT_32)
