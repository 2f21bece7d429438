"""
NumSnapshot — Serializable Snapshot of a Num

Immutable Pydantic модель, представляющая одно значение Num вместе с его
семейством и контекстом точности. Полная совместимость с JSON Schema
(tanum/core/contracts/schema/num_value.json).

Восстановление идёт через фабрику семейства, поэтому закон строкового
round-trip выполняется и через снапшоты. Семейство NaN всегда даёт синглтон.
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, model_validator

from tanum.core.contracts.validators import validate_num_value
from tanum.core.num.decimal_num import DecimalNum
from tanum.core.num.double_num import DoubleNum
from tanum.core.num.nan import NaN
from tanum.core.num.num import Num
from tanum.core.num.settings import RoundingMode, settings_for

# =============================================================================
# ENUMS
# =============================================================================


class NumFamily(str, Enum):
    """Семейство Num."""

    DECIMAL = "DecimalNum"
    DOUBLE = "DoubleNum"
    NAN = "NaN"


# =============================================================================
# SNAPSHOT MODEL
# =============================================================================


class NumSnapshot(BaseModel):
    """
    Снапшот значения Num.

    Immutable модель (frozen=True).
    """

    family: NumFamily = Field(..., description="Семейство значения")
    value: str = Field(..., min_length=1, description="Строковое представление")
    precision: Optional[int] = Field(
        None, gt=0, description="Значащие цифры (только DecimalNum)"
    )
    rounding: Optional[RoundingMode] = Field(
        None, description="Режим округления (только DecimalNum)"
    )

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_decimal_context(self) -> "NumSnapshot":
        """DecimalNum без точности восстановить нельзя."""
        if self.family is NumFamily.DECIMAL and self.precision is None:
            raise ValueError("DecimalNum snapshot requires precision")
        return self

    @classmethod
    def of(cls, num: Num) -> "NumSnapshot":
        """
        Снапшот значения.

        Args:
            num: Любое значение Num

        Returns:
            NumSnapshot
        """
        if num.is_nan():
            return cls(family=NumFamily.NAN, value=str(num))
        if isinstance(num, DecimalNum):
            return cls(
                family=NumFamily.DECIMAL,
                value=str(num),
                precision=num.precision,
                rounding=num.settings.rounding,
            )
        return cls(family=NumFamily(num.name), value=str(num))

    def to_num(self) -> Num:
        """
        Восстановление значения.

        Returns:
            Num исходного семейства

        Raises:
            InvalidNumLiteralError: Если value не является числом семейства
        """
        if self.family is NumFamily.NAN:
            return NaN
        if self.family is NumFamily.DOUBLE:
            return DoubleNum.value_of(self.value)

        settings = settings_for(self.precision, self.rounding or RoundingMode.HALF_UP)
        return DecimalNum(DecimalNum.value_of(self.value).delegate, settings)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def to_snapshot(num: Num) -> Dict[str, Any]:
    """
    Снапшот значения как JSON-совместимый dict.

    Args:
        num: Любое значение Num

    Returns:
        dict, соответствующий схеме num_value
    """
    return NumSnapshot.of(num).model_dump(mode="json")


def from_snapshot(data: Dict[str, Any]) -> Num:
    """
    Значение Num из снапшота.

    Args:
        data: dict по схеме num_value

    Returns:
        Num исходного семейства

    Raises:
        jsonschema.ValidationError: Если data не соответствует схеме
        pydantic.ValidationError: Если data не проходит валидацию модели
        InvalidNumLiteralError: Если value не является числом семейства
    """
    validate_num_value(data)
    return NumSnapshot.model_validate(data).to_num()
