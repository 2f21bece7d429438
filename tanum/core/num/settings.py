"""
DecimalNumSettings — Конфигурация точности DecimalNum

Immutable Pydantic модель: число значащих цифр и режим округления.
Каждый экземпляр DecimalNum несёт свои настройки; глобального
изменяемого состояния нет, дефолт — константа DEFAULT_SETTINGS.
"""

import decimal
from enum import Enum
from functools import lru_cache
from typing import Final

from pydantic import BaseModel, Field

# =============================================================================
# ПАРАМЕТРЫ ПО УМОЛЧАНИЮ
# =============================================================================

# Точность по умолчанию (значащие цифры)
DEFAULT_PRECISION: Final[int] = 32

# Предел кэшей контекстов, настроек и фабрик (LRU)
SETTINGS_CACHE_SIZE: Final[int] = 256


# =============================================================================
# ENUMS
# =============================================================================


class RoundingMode(str, Enum):
    """Режим округления (значения совпадают с константами модуля decimal)."""

    HALF_UP = decimal.ROUND_HALF_UP
    HALF_EVEN = decimal.ROUND_HALF_EVEN
    HALF_DOWN = decimal.ROUND_HALF_DOWN
    UP = decimal.ROUND_UP
    DOWN = decimal.ROUND_DOWN
    CEILING = decimal.ROUND_CEILING
    FLOOR = decimal.ROUND_FLOOR


# =============================================================================
# SETTINGS MODEL
# =============================================================================


class DecimalNumSettings(BaseModel):
    """
    Контекст точности DecimalNum.

    Все изменения должны создавать новый экземпляр (frozen=True).
    """

    precision: int = Field(
        DEFAULT_PRECISION, gt=0, description="Число значащих цифр"
    )
    rounding: RoundingMode = Field(
        RoundingMode.HALF_UP, description="Режим округления"
    )

    model_config = {"frozen": True}

    def context(self) -> decimal.Context:
        """
        decimal.Context для этих настроек.

        Returns:
            Кэшированный контекст; вызывающая сторона не должна его изменять
        """
        return math_context(self.precision, self.rounding)

    def widest(self, other: "DecimalNumSettings") -> "DecimalNumSettings":
        """
        Настройки с большей точностью (при равенстве — self).

        Args:
            other: Настройки второго операнда

        Returns:
            self или other
        """
        return other if other.precision > self.precision else self


DEFAULT_SETTINGS: Final[DecimalNumSettings] = DecimalNumSettings()


@lru_cache(maxsize=SETTINGS_CACHE_SIZE)
def math_context(precision: int, rounding: RoundingMode = RoundingMode.HALF_UP) -> decimal.Context:
    """
    Контекст рабочей точности с неограниченным диапазоном порядков.

    Args:
        precision: Число значащих цифр (> 0)
        rounding: Режим округления

    Returns:
        decimal.Context, общий для всех значений с такими же настройками

    Raises:
        ValueError: Если precision <= 0
    """
    if precision <= 0:
        raise ValueError(f"precision must be positive, got {precision}")

    return decimal.Context(
        prec=precision,
        rounding=RoundingMode(rounding).value,
        Emax=decimal.MAX_EMAX,
        Emin=decimal.MIN_EMIN,
    )


@lru_cache(maxsize=SETTINGS_CACHE_SIZE)
def settings_for(precision: int, rounding: RoundingMode = RoundingMode.HALF_UP) -> DecimalNumSettings:
    """
    Кэшированный экземпляр настроек.

    Args:
        precision: Число значащих цифр
        rounding: Режим округления

    Returns:
        DecimalNumSettings

    Raises:
        pydantic.ValidationError: Если precision <= 0
    """
    return DecimalNumSettings(precision=precision, rounding=rounding)
