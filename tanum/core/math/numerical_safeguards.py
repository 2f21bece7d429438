"""
Numerical Safeguards — Float Primitives for the Fast Path

Модуль содержит float-примитивы, на которых построен DoubleNum:
- Epsilon-параметр для толерантного равенства
- Проверка валидности float (не NaN, не Inf)
- Абсолютное epsilon-сравнение
- IEEE-754 совместимые pow/fmod/exp: вместо Python исключений
  (OverflowError, ValueError) возвращаются inf/nan, как это делает
  нативная арифметика с плавающей точкой

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Функции никогда не бросают исключений на корректных float входах
2. Результат nan означает "неопределено"; канонизация nan в NaN
   выполняется вызывающей стороной (DoubleNum)
3. Все операции детерминированы и воспроизводимы
"""

import math
from typing import Final

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Абсолютная толерантность равенства DoubleNum.
# Значения ближе EPS считаются равными (is_equal, ==).
# Упорядочивание (compare_to, is_less_than, ...) её НЕ использует.
EPS_DOUBLE_NUM: Final[float] = 1e-5


# =============================================================================
# ВАЛИДАЦИЯ FLOAT
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение конечное, False если NaN или Inf
    """
    return math.isfinite(value)


def is_close_abs(a: float, b: float, eps: float = EPS_DOUBLE_NUM) -> bool:
    """
    Абсолютное epsilon-сравнение: abs(a - b) < eps.

    Строгое неравенство: значения, отличающиеся ровно на eps, не равны.
    Одинаковые бесконечности равны, разные и inf против конечного нет.

    Args:
        a: Первое значение
        b: Второе значение
        eps: Абсолютная толерантность (default: EPS_DOUBLE_NUM)

    Returns:
        True если значения отличаются меньше чем на eps

    Examples:
        >>> is_close_abs(5.0, 5.000001)
        True
        >>> is_close_abs(5.0, 5.0001)
        False
    """
    if eps <= 0:
        raise ValueError(f"eps must be positive, got {eps}")

    return a == b or abs(a - b) < eps


# =============================================================================
# IEEE-754 АРИФМЕТИКА
# =============================================================================


def _is_odd_integer(value: float) -> bool:
    return math.isfinite(value) and value == math.floor(value) and math.fmod(value, 2.0) != 0.0


def ieee_pow(base: float, exponent: float) -> float:
    """
    Возведение в степень с IEEE-754 семантикой.

    math.pow бросает OverflowError при переполнении и ValueError для
    0 ** отрицательное и отрицательное ** дробное. Здесь эти случаи
    возвращают ±inf и nan соответственно.

    Args:
        base: Основание
        exponent: Показатель степени

    Returns:
        base ** exponent, ±inf при переполнении, nan если не определено

    Examples:
        >>> ieee_pow(2.0, 10.0)
        1024.0
        >>> ieee_pow(10.0, 400.0)
        inf
        >>> ieee_pow(0.0, -1.0)
        inf
        >>> ieee_pow(-8.0, 1.0 / 3.0)
        nan
    """
    try:
        return math.pow(base, exponent)
    except OverflowError:
        # Знак результата отрицателен только для отрицательного основания
        # в нечётной целой степени
        if base < 0 and _is_odd_integer(exponent):
            return -math.inf
        return math.inf
    except ValueError:
        if base == 0.0:
            # pow(±0, y<0): ±inf для нечётного целого y, иначе +inf
            if _is_odd_integer(exponent):
                return math.copysign(math.inf, base)
            return math.inf
        return math.nan


def ieee_fmod(dividend: float, divisor: float) -> float:
    """
    Остаток от деления со знаком делимого (усечённое деление).

    Args:
        dividend: Делимое
        divisor: Делитель

    Returns:
        math.fmod(dividend, divisor) или nan, если результат не определён
        (делитель 0 или делимое бесконечно)
    """
    try:
        return math.fmod(dividend, divisor)
    except ValueError:
        return math.nan


def ieee_exp(value: float) -> float:
    """
    Экспонента без OverflowError: переполнение даёт +inf.

    Args:
        value: Показатель

    Returns:
        e ** value
    """
    try:
        return math.exp(value)
    except OverflowError:
        return math.inf
