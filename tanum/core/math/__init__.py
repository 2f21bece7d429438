"""
Core math modules

Численные примитивы, на которых построены представления Num.
"""

# Numerical Safeguards (float fast path)
from tanum.core.math.numerical_safeguards import (
    EPS_DOUBLE_NUM,
    ieee_exp,
    ieee_fmod,
    ieee_pow,
    is_close_abs,
    is_valid_float,
)

# Decimal Algorithms (arbitrary precision)
from tanum.core.math.decimal_algorithms import (
    EXACT_CONTEXT,
    INT32_MAX,
    INT32_MIN,
    INT64_MAX,
    INT64_MIN,
    LOG_SERIES_ITERATIONS,
    POWER_GUARD_DIGITS,
    babylonian_sqrt,
    continued_fraction_log,
    integral_power,
    scientific_split,
    split_power,
    sqrt_seed,
    taylor_exp,
)

__all__ = [
    # Numerical Safeguards — Epsilon constants
    "EPS_DOUBLE_NUM",
    # Numerical Safeguards — Validation and comparisons
    "is_valid_float",
    "is_close_abs",
    # Numerical Safeguards — IEEE-754 arithmetic
    "ieee_exp",
    "ieee_fmod",
    "ieee_pow",
    # Decimal Algorithms — Constants
    "EXACT_CONTEXT",
    "INT32_MAX",
    "INT32_MIN",
    "INT64_MAX",
    "INT64_MIN",
    "LOG_SERIES_ITERATIONS",
    "POWER_GUARD_DIGITS",
    # Decimal Algorithms — Functions
    "babylonian_sqrt",
    "continued_fraction_log",
    "integral_power",
    "scientific_split",
    "split_power",
    "sqrt_seed",
    "taylor_exp",
]
