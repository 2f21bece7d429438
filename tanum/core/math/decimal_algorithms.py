"""
Decimal Algorithms — Iterative Arbitrary-Precision Math

Модуль содержит итеративные алгоритмы над decimal.Decimal, на которых
построен DecimalNum:
- Квадратный корень: метод Герона (Babylonian) с seed из научной нотации
- Натуральный логарифм: фиксированная 1000-членная цепная дробь
- Экспонента: ряд Тейлора до стабилизации суммы
- Вещественная степень: x^(a+b) = x^a (decimal) * x^b (double)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Число итераций логарифма фиксировано (LOG_SERIES_ITERATIONS), без
   адаптивного выхода: от него зависят эталонные значения в тестах
2. Корень итерируется, пока два последовательных приближения не совпадут
   на рабочей точности
3. Промежуточные сложения/вычитания точные (EXACT_CONTEXT), округление
   только там, где его выполняет контекст рабочей точности
4. Функции не проверяют домен: отрицательные/нулевые операнды отсекаются
   вызывающей стороной (DecimalNum) и превращаются в NaN

ФОРМУЛЫ:
    sqrt:  x[n+1] = (x[n] + v / x[n]) / 2
    log:   ret = 1001; для i = 1000..0:
               ret = ((i // 2 + 1)^2 * (v - 1)) / ret + (i + 1)
           ln(v) = (v - 1) / ret
    exp:   e^x = Σ x^k / k!
"""

import logging
from decimal import (
    MAX_EMAX,
    MAX_PREC,
    MIN_EMIN,
    ROUND_HALF_UP,
    Context,
    Decimal,
)
from typing import Final, Optional

from tanum.core.math.numerical_safeguards import ieee_pow, is_valid_float

logger = logging.getLogger(__name__)

# =============================================================================
# ПАРАМЕТРЫ АЛГОРИТМОВ
# =============================================================================

# Число членов цепной дроби логарифма (итерация от 1000 вниз до 0)
LOG_SERIES_ITERATIONS: Final[int] = 1000

# Границы целой части вещественного показателя (signed 32-bit)
INT32_MIN: Final[int] = -(2**31)
INT32_MAX: Final[int] = 2**31 - 1

# Границы long_value (signed 64-bit)
INT64_MIN: Final[int] = -(2**63)
INT64_MAX: Final[int] = 2**63 - 1

# Дополнительные цифры для x^a в split_power до финального округления
POWER_GUARD_DIGITS: Final[int] = 10

# Контекст для точных промежуточных операций (сложение, вычитание, abs).
# Никогда не используется для деления.
EXACT_CONTEXT: Final[Context] = Context(
    prec=MAX_PREC, rounding=ROUND_HALF_UP, Emax=MAX_EMAX, Emin=MIN_EMIN
)

_ZERO: Final[Decimal] = Decimal(0)
_ONE: Final[Decimal] = Decimal(1)
_TWO: Final[Decimal] = Decimal(2)
_TEN: Final[Decimal] = Decimal(10)


# =============================================================================
# КВАДРАТНЫЙ КОРЕНЬ
# =============================================================================


def scientific_split(value: Decimal) -> tuple[Decimal, int]:
    """
    Разложение значения в научную нотацию с двумя значащими цифрами.

    Аналог форматирования "%1.1e": мантисса в [1, 10), округление HALF_UP.

    Args:
        value: Положительное значение

    Returns:
        (mantissa, exponent): value ≈ mantissa * 10^exponent

    Examples:
        >>> scientific_split(Decimal("300000000000"))
        (Decimal('3.0'), 11)
        >>> scientific_split(Decimal("0.0996"))
        (Decimal('1.0'), -1)
    """
    notation = Context(prec=2, rounding=ROUND_HALF_UP, Emax=MAX_EMAX, Emin=MIN_EMIN)
    rounded = notation.create_decimal(value)
    exponent = rounded.adjusted()
    mantissa = rounded.scaleb(-exponent, EXACT_CONTEXT)
    return mantissa, exponent


def sqrt_seed(value: Decimal) -> Decimal:
    """
    Начальное приближение корня по научной нотации операнда.

    Нечётный порядок делается чётным (мантисса * 10, порядок - 1), так
    что мантисса попадает в [1, 100). Корень из неё лежит в [1, 10):
    seed-мантисса 2 для мантиссы < 10, иначе 6.

    Args:
        value: Положительное значение

    Returns:
        seed = (2 | 6) * 10^(exponent / 2)
    """
    mantissa, exponent = scientific_split(value)

    if exponent % 2 != 0:
        exponent -= 1
        mantissa = EXACT_CONTEXT.multiply(mantissa, _TEN)
        logger.debug("modified notation %se%s", mantissa, exponent)

    estimated_mantissa = _TWO if mantissa < _TEN else Decimal(6)
    seed = estimated_mantissa.scaleb(exponent // 2, EXACT_CONTEXT)
    logger.debug(
        "x[0] =~ sqrt(%s...*10^%s) =~ %s", mantissa, exponent, seed
    )
    return seed


def _abbreviate(value: Decimal, width: int = 20) -> str:
    text = f"{value:e}"
    if len(text) <= 2 * width:
        return text
    return f"{text[:width]}..{text[-width:]}"


def babylonian_sqrt(value: Decimal, context: Context) -> Decimal:
    """
    Квадратный корень методом Герона на точности контекста.

    Итерация x[n+1] = (x[n] + v / x[n]) / 2 продолжается, пока два
    последовательных приближения не совпадут. Если округление зацикливает
    итерацию между двумя соседними значениями, возвращается последнее.

    Args:
        value: Положительное значение (v > 0)
        context: Контекст рабочей точности (precision + rounding)

    Returns:
        √value, округлённый до context.prec значащих цифр

    Raises:
        ValueError: Если value <= 0
    """
    if value <= _ZERO:
        raise ValueError(f"value must be positive, got {value}")

    logger.debug("sqrt of %s at precision %s", value, context.prec)
    estimate = sqrt_seed(context.create_decimal(value))
    previous: Optional[Decimal] = None
    iteration = 1

    while True:
        quotient = context.divide(value, estimate)
        total = EXACT_CONTEXT.add(estimate, quotient)
        new_estimate = context.divide(total, _TWO)
        delta = EXACT_CONTEXT.abs(EXACT_CONTEXT.subtract(new_estimate, estimate))

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "x[%d] = %s, delta = %.1e", iteration, _abbreviate(new_estimate), delta
            )

        if delta == _ZERO:
            return new_estimate
        if new_estimate == previous:
            logger.debug("sqrt iteration oscillates at x[%d], stopping", iteration)
            return new_estimate

        previous = estimate
        estimate = new_estimate
        iteration += 1


# =============================================================================
# ЛОГАРИФМ И ЭКСПОНЕНТА
# =============================================================================


def continued_fraction_log(value: Decimal, context: Context) -> Decimal:
    """
    Натуральный логарифм через фиксированную цепную дробь.

    Всегда выполняется LOG_SERIES_ITERATIONS + 1 шагов, без проверки
    сходимости. Сходится быстрее всего вблизи 1.

    Args:
        value: Положительное значение (v > 0)
        context: Контекст рабочей точности

    Returns:
        ln(value) на точности контекста

    Raises:
        ValueError: Если value <= 0
    """
    if value <= _ZERO:
        raise ValueError(f"value must be positive, got {value}")

    x = EXACT_CONTEXT.subtract(value, _ONE)
    ret = Decimal(LOG_SERIES_ITERATIONS + 1)

    for i in range(LOG_SERIES_ITERATIONS, -1, -1):
        numerator = Decimal((i // 2 + 1) ** 2)
        numerator = context.multiply(numerator, x)
        ret = context.divide(numerator, ret)
        ret = context.add(ret, Decimal(i + 1))

    return context.divide(x, ret)


def taylor_exp(value: Decimal, context: Context) -> Decimal:
    """
    Экспонента через ряд Тейлора.

    Суммирование останавливается, когда очередной член обнулился или
    перестал менять сумму на рабочей точности. Для отрицательного
    показателя ряд знакопеременный и теряет значащие цифры, поэтому
    считается 1 / e^|value|.

    Args:
        value: Показатель
        context: Контекст рабочей точности

    Returns:
        e^value на точности контекста

    Examples:
        >>> taylor_exp(Decimal(-50), Context(prec=5)) > 0
        True
    """
    if value < _ZERO:
        return context.divide(_ONE, taylor_exp(value.copy_negate(), context))

    term = _ONE
    total = _ONE
    k = 1

    while term != _ZERO:
        term = context.divide(context.multiply(term, value), Decimal(k))
        following = context.add(total, term)
        if following == total:
            break
        total = following
        k += 1

    return total


# =============================================================================
# СТЕПЕНИ
# =============================================================================


def integral_power(base: Decimal, exponent: int, context: Context) -> Decimal:
    """
    Целая степень на точности контекста.

    x^0 = 1 для любого x (включая 0). Нулевое основание с отрицательным
    показателем не определено и должно отсекаться вызывающей стороной.

    Args:
        base: Основание
        exponent: Целый показатель
        context: Контекст рабочей точности

    Returns:
        base^exponent, округлённое по контексту

    Raises:
        ZeroDivisionError: Если base == 0 и exponent < 0
    """
    if exponent == 0:
        return _ONE
    if base == _ZERO and exponent < 0:
        raise ZeroDivisionError("zero cannot be raised to a negative power")
    return context.power(base, Decimal(exponent))


def split_power(base: Decimal, exponent: Decimal, context: Context) -> Optional[Decimal]:
    """
    Вещественная степень x^n через разложение n = a + b.

    a — целая часть n (должна помещаться в signed 32-bit int), b — остаток
    со знаком n, |b| < 1. x^a считается в decimal, x^b — через float pow,
    поэтому дробная часть результата ограничена точностью double.

    Args:
        base: Основание x
        exponent: Показатель n
        context: Контекст рабочей точности результата

    Returns:
        x^n на точности контекста, или None если результат не определён
        (0 в отрицательной степени, отрицательное основание с дробным
        показателем, нефинитный float множитель)

    Raises:
        OverflowError: Если целая часть n вне диапазона signed 32-bit
    """
    fraction = EXACT_CONTEXT.remainder(exponent, _ONE)
    whole = int(EXACT_CONTEXT.subtract(exponent, fraction))

    if not INT32_MIN <= whole <= INT32_MAX:
        raise OverflowError(f"integer part of exponent {exponent} overflows int32")

    if base == _ZERO and whole < 0:
        return None

    guarded = Context(
        prec=context.prec + POWER_GUARD_DIGITS,
        rounding=context.rounding,
        Emax=MAX_EMAX,
        Emin=MIN_EMIN,
    )
    base_pow_whole = integral_power(base, whole, guarded)
    base_pow_fraction = ieee_pow(float(base), float(fraction))

    if not is_valid_float(base_pow_fraction):
        return None

    product = EXACT_CONTEXT.multiply(base_pow_whole, Decimal(repr(base_pow_fraction)))
    return context.create_decimal(product)
