"""
Num — числовое ядро тулкита

Контракт Num, его представления (DoubleNum, DecimalNum), синглтон NaN,
фабрики семейств, настройки точности и снапшоты.
"""

# Num contract
from tanum.core.num.num import (
    InvalidNumLiteralError,
    NaNConversionError,
    Num,
    NumFactory,
    NumFamilyMismatchError,
    NumberLike,
    require_family,
)

# NaN sentinel
from tanum.core.num.nan import NaN, NaNFactory, NaNType

# Fast path
from tanum.core.num.double_num import DoubleNum, DoubleNumFactory

# Arbitrary precision
from tanum.core.num.settings import (
    DEFAULT_PRECISION,
    DEFAULT_SETTINGS,
    SETTINGS_CACHE_SIZE,
    DecimalNumSettings,
    RoundingMode,
)
from tanum.core.num.decimal_num import DecimalNum, DecimalNumFactory

# Snapshots
from tanum.core.num.snapshot import NumFamily, NumSnapshot, from_snapshot, to_snapshot

__all__ = [
    # Contract
    "Num",
    "NumFactory",
    "NumberLike",
    "require_family",
    # Contract — Exceptions
    "InvalidNumLiteralError",
    "NaNConversionError",
    "NumFamilyMismatchError",
    # NaN
    "NaN",
    "NaNFactory",
    "NaNType",
    # DoubleNum
    "DoubleNum",
    "DoubleNumFactory",
    # DecimalNum
    "DEFAULT_PRECISION",
    "DEFAULT_SETTINGS",
    "SETTINGS_CACHE_SIZE",
    "DecimalNum",
    "DecimalNumFactory",
    "DecimalNumSettings",
    "RoundingMode",
    # Snapshots
    "NumFamily",
    "NumSnapshot",
    "from_snapshot",
    "to_snapshot",
]
