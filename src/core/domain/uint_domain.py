"""
UintDomain: Модель беззнакового целочисленного домена

Immutable Pydantic модель, описывающая множество допустимых значений для
NonZero: фиксированная разрядность (u8 ... u128, usize) либо arbitrary
precision (biguint, bits=None).

Python int не имеет фиксированной ширины, поэтому домен хранится рядом со
значением и проверяется явно при каждом входе извне.
"""

import sys
from typing import Dict, Final, Optional

from pydantic import BaseModel, Field

from src.core.math.bit_ops import bit_mask, fits_in_width


# =============================================================================
# DOMAIN MODEL
# =============================================================================


class UintDomain(BaseModel):
    """
    Беззнаковый целочисленный домен.

    Immutable модель (frozen=True): домены сравниваются и хэшируются по
    значению, поэтому два экземпляра U8 взаимозаменяемы.
    """

    name: str = Field(..., min_length=1, description="Имя домена (например, 'u32')")
    bits: Optional[int] = Field(
        default=None, ge=1, description="Разрядность в битах (None = arbitrary precision)"
    )

    model_config = {"frozen": True}

    @property
    def is_fixed_width(self) -> bool:
        """True для доменов с фиксированной разрядностью."""
        return self.bits is not None

    @property
    def max_value(self) -> Optional[int]:
        """Максимальное значение домена (None для arbitrary precision)."""
        if self.bits is None:
            return None
        return bit_mask(self.bits)

    def contains(self, value: int) -> bool:
        """Проверка принадлежности значения домену без exception."""
        if isinstance(value, bool) or not isinstance(value, int):
            return False
        return fits_in_width(value, self.bits)

    def validate_value(self, value: int, name: str = "value") -> int:
        """
        Проверка, что значение принадлежит домену.

        Ноль принадлежит любому домену: отсев нуля выполняет NonZero.

        Args:
            value: Проверяемое значение
            name: Имя параметра для сообщения об ошибке

        Returns:
            value без изменений

        Raises:
            TypeError: Если value не int (bool тоже отклоняется)
            ValueError: Если value отрицательное или не помещается в домен
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"{name} must be an int, got {type(value).__name__}")
        if value < 0:
            raise ValueError(f"{name} must be non-negative for {self.name}, got {value}")
        if not fits_in_width(value, self.bits):
            raise ValueError(f"{name} {value} exceeds {self.name} max {self.max_value}")
        return value

    def __str__(self) -> str:
        return self.name


# =============================================================================
# ПРЕДОПРЕДЕЛЁННЫЕ ДОМЕНЫ
# =============================================================================

# Разрядность указателя текущего интерпретатора (64 на типичных платформах)
POINTER_BITS: Final[int] = sys.maxsize.bit_length() + 1

U8: Final[UintDomain] = UintDomain(name="u8", bits=8)
U16: Final[UintDomain] = UintDomain(name="u16", bits=16)
U32: Final[UintDomain] = UintDomain(name="u32", bits=32)
U64: Final[UintDomain] = UintDomain(name="u64", bits=64)
U128: Final[UintDomain] = UintDomain(name="u128", bits=128)
USIZE: Final[UintDomain] = UintDomain(name="usize", bits=POINTER_BITS)
BIGUINT: Final[UintDomain] = UintDomain(name="biguint", bits=None)

DOMAINS: Final[Dict[str, UintDomain]] = {
    domain.name: domain for domain in (U8, U16, U32, U64, U128, USIZE, BIGUINT)
}


def get_domain(name: str) -> UintDomain:
    """
    Поиск предопределённого домена по имени.

    Raises:
        KeyError: Если домен с таким именем не зарегистрирован
    """
    try:
        return DOMAINS[name]
    except KeyError:
        raise KeyError(f"Unknown uint domain: {name!r} (known: {', '.join(DOMAINS)})")
