"""
NonZero: Беззнаковое целое, гарантированно не равное нулю

Value object над беззнаковым доменом (u8 ... u128, usize, biguint):
- Проверяемые конструкторы (new, to_nonzero) и мутаторы (set, replace, map)
- Непроверяемые конструкторы для вызывающих, уже доказавших value != 0
- Операторы + - * // / (и in-place формы) между NonZero одного домена
- Битовые запросы (trailing/leading zeros/ones) и without_trailing_zeros

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. value != 0 на всё время жизни экземпляра
2. Валидация (new/set/replace/map/checked_*) сообщает об отказе через None/False,
   никогда не через exception
3. Нарушение предусловия оператора (a - b при a <= b, a / b при a < b,
   переполнение при overflow_checks) -> NonZeroInvariantViolation
4. Unchecked-пути проверяют предусловие только через assert (снимается при -O)

Экземпляры изменяемы (set, in-place операторы), поэтому не хэшируются.
Разделение значения только через copy().
"""

from functools import total_ordering
from typing import Any, Callable, Optional

from loguru import logger

from src.core.domain.arithmetic_settings import get_arithmetic_config
from src.core.domain.uint_domain import BIGUINT, UintDomain
from src.core.math.bit_ops import (
    count_ones,
    leading_ones,
    leading_zeros,
    strip_trailing_zeros,
    trailing_ones,
    trailing_zeros,
    wrap_to_width,
)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class NonZeroInvariantViolation(ArithmeticError):
    """
    Нарушение предусловия операции над NonZero.

    Ошибка программиста, а не recoverable условие: результат операции был бы
    нулевым. Вызывающий обязан заранее сравнить операнды (<, <=) или
    использовать checked_* варианты.
    """


class NonZeroOverflowViolation(NonZeroInvariantViolation, OverflowError):
    """Результат + или * не помещается в фиксированную разрядность домена."""


class DomainMismatchError(TypeError):
    """Операнды NonZero принадлежат разным доменам."""


class DomainCapabilityError(TypeError):
    """Запрос не определён для домена (leading-биты у arbitrary precision)."""


# =============================================================================
# NONZERO
# =============================================================================


@total_ordering
class NonZero:
    """
    Целое значение домена с инвариантом value != 0.

    Прямой вызов NonZero(...) запрещён: используйте NonZero.new() для
    произвольного ввода или NonZero.new_unchecked() для доказанно
    ненулевых значений.

    Examples:
        >>> n = NonZero.new(42)
        >>> str(n)
        '42'
        >>> NonZero.new(0) is None
        True
    """

    __slots__ = ("_value", "_domain")

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        raise TypeError("use NonZero.new() or NonZero.new_unchecked() to construct NonZero")

    @classmethod
    def _from_trusted(cls, value: int, domain: UintDomain) -> "NonZero":
        instance = object.__new__(cls)
        instance._value = value
        instance._domain = domain
        return instance

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def new(cls, value: int, domain: UintDomain = BIGUINT) -> Optional["NonZero"]:
        """
        Проверяемый конструктор.

        Args:
            value: Значение домена
            domain: Беззнаковый домен (default: BIGUINT)

        Returns:
            NonZero если value != 0, иначе None

        Raises:
            TypeError: Если value не int
            ValueError: Если value не принадлежит домену (отрицательное, шире bits)
        """
        domain.validate_value(value)
        if value == 0:
            logger.debug("Rejected zero for NonZero[{}]", domain)
            return None
        return cls._from_trusted(value, domain)

    @classmethod
    def new_unchecked(cls, value: int, domain: UintDomain = BIGUINT) -> "NonZero":
        """
        Конструктор без проверки.

        ПРЕДУСЛОВИЕ: value != 0 и value принадлежит domain. Гарантирует
        вызывающий. Проверка выполняется только assert'ом и исчезает при
        запуске python -O; нарушение предусловия в этом режиме даёт
        экземпляр с нарушенным инвариантом.
        """
        assert value != 0 and domain.contains(value), (
            f"new_unchecked precondition violated: {value!r} is not a nonzero {domain}"
        )
        return cls._from_trusted(value, domain)

    @classmethod
    def one(cls, domain: UintDomain = BIGUINT) -> "NonZero":
        """Единица домена."""
        return cls._from_trusted(1, domain)

    # -------------------------------------------------------------------------
    # Доступ и мутация
    # -------------------------------------------------------------------------

    @property
    def domain(self) -> UintDomain:
        return self._domain

    def get(self) -> int:
        """Обёрнутое значение."""
        return self._value

    def set(self, value: int) -> bool:
        """
        Проверяемая замена значения.

        Args:
            value: Новое значение домена

        Returns:
            True если value != 0 и замена выполнена; False если value == 0
            (экземпляр не изменён)
        """
        self._domain.validate_value(value)
        if value == 0:
            logger.debug("Rejected set(0) on NonZero[{}]={}", self._domain, self._value)
            return False
        self._value = value
        return True

    def set_unchecked(self, value: int) -> None:
        """
        Замена значения без проверки.

        ПРЕДУСЛОВИЕ: value != 0 и value принадлежит домену (assert-only).
        """
        assert value != 0 and self._domain.contains(value), (
            f"set_unchecked precondition violated: {value!r} is not a nonzero {self._domain}"
        )
        self._value = value

    def replace(self, value: int) -> Optional[int]:
        """
        Проверяемая замена с возвратом старого значения.

        Returns:
            Прежнее значение, либо None если value == 0 (экземпляр не изменён)
        """
        previous = self._value
        if not self.set(value):
            return None
        return previous

    def swap(self, other: "NonZero") -> None:
        """Обмен значениями двух NonZero одного домена."""
        self._require_same_domain(other, "swap")
        self._value, other._value = other._value, self._value

    def map(self, f: Callable[[int], int]) -> Optional["NonZero"]:
        """
        Применение f к значению с повторной проверкой результата.

        Returns:
            Новый NonZero, либо None если f вернула ноль
        """
        return type(self).new(f(self._value), self._domain)

    def map_unchecked(self, f: Callable[[int], int]) -> "NonZero":
        """Применение f без проверки. ПРЕДУСЛОВИЕ: f возвращает ненулевое значение."""
        return type(self).new_unchecked(f(self._value), self._domain)

    def copy(self) -> "NonZero":
        return self._from_trusted(self._value, self._domain)

    def __copy__(self) -> "NonZero":
        return self.copy()

    def __deepcopy__(self, memo: dict) -> "NonZero":
        return self.copy()

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def _require_same_domain(self, other: "NonZero", op: str) -> None:
        if not isinstance(other, NonZero):
            raise TypeError(f"{op} expects NonZero, got {type(other).__name__}")
        if other._domain != self._domain:
            raise DomainMismatchError(
                f"{op} on NonZero[{self._domain}] and NonZero[{other._domain}]"
            )

    def _fit(self, result: int, op: str, other: "NonZero") -> int:
        """Приведение результата + или * к разрядности домена."""
        max_value = self._domain.max_value
        if max_value is None or result <= max_value:
            return result

        if get_arithmetic_config().overflow_checks:
            raise NonZeroOverflowViolation(
                f"{self._domain} overflow: {self._value} {op} {other._value} = {result} "
                f"> {max_value}"
            )

        wrapped = wrap_to_width(result, self._domain.bits)
        if wrapped == 0:
            raise NonZeroInvariantViolation(
                f"{self._domain} wrapping {self._value} {op} {other._value} produced zero"
            )
        return wrapped

    def _add_value(self, other: "NonZero") -> int:
        self._require_same_domain(other, "+")
        return self._fit(self._value + other._value, "+", other)

    def _mul_value(self, other: "NonZero") -> int:
        self._require_same_domain(other, "*")
        return self._fit(self._value * other._value, "*", other)

    def _sub_value(self, other: "NonZero") -> int:
        self._require_same_domain(other, "-")
        if self._value <= other._value:
            raise NonZeroInvariantViolation(
                f"subtraction requires lhs > rhs, got {self._value} - {other._value}"
            )
        return self._value - other._value

    def _div_value(self, other: "NonZero") -> int:
        self._require_same_domain(other, "/")
        if self._value < other._value:
            raise NonZeroInvariantViolation(
                f"division requires lhs >= rhs, got {self._value} / {other._value}"
            )
        return self._value // other._value

    def __add__(self, other: "NonZero") -> "NonZero":
        if not isinstance(other, NonZero):
            return NotImplemented
        return self._from_trusted(self._add_value(other), self._domain)

    def __sub__(self, other: "NonZero") -> "NonZero":
        if not isinstance(other, NonZero):
            return NotImplemented
        return self._from_trusted(self._sub_value(other), self._domain)

    def __mul__(self, other: "NonZero") -> "NonZero":
        if not isinstance(other, NonZero):
            return NotImplemented
        return self._from_trusted(self._mul_value(other), self._domain)

    def __floordiv__(self, other: "NonZero") -> "NonZero":
        """Целочисленное деление. ПРЕДУСЛОВИЕ: self >= other."""
        if not isinstance(other, NonZero):
            return NotImplemented
        return self._from_trusted(self._div_value(other), self._domain)

    # Частное NonZero всегда целое: / совпадает с //
    __truediv__ = __floordiv__

    def __iadd__(self, other: "NonZero") -> "NonZero":
        if not isinstance(other, NonZero):
            return NotImplemented
        self._value = self._add_value(other)
        return self

    def __isub__(self, other: "NonZero") -> "NonZero":
        if not isinstance(other, NonZero):
            return NotImplemented
        self._value = self._sub_value(other)
        return self

    def __imul__(self, other: "NonZero") -> "NonZero":
        if not isinstance(other, NonZero):
            return NotImplemented
        self._value = self._mul_value(other)
        return self

    def __ifloordiv__(self, other: "NonZero") -> "NonZero":
        if not isinstance(other, NonZero):
            return NotImplemented
        self._value = self._div_value(other)
        return self

    __itruediv__ = __ifloordiv__

    def _checked(self, compute: Callable[["NonZero"], int], other: "NonZero") -> Optional["NonZero"]:
        try:
            value = compute(other)
        except NonZeroInvariantViolation as e:
            logger.debug("Checked NonZero operation rejected: {}", e)
            return None
        return self._from_trusted(value, self._domain)

    def checked_add(self, other: "NonZero") -> Optional["NonZero"]:
        """self + other, либо None при переполнении (или нулевом wrap)."""
        return self._checked(self._add_value, other)

    def checked_sub(self, other: "NonZero") -> Optional["NonZero"]:
        """self - other, либо None при self <= other."""
        return self._checked(self._sub_value, other)

    def checked_mul(self, other: "NonZero") -> Optional["NonZero"]:
        return self._checked(self._mul_value, other)

    def checked_div(self, other: "NonZero") -> Optional["NonZero"]:
        return self._checked(self._div_value, other)

    # -------------------------------------------------------------------------
    # Сравнение
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NonZero):
            return NotImplemented
        return self._domain == other._domain and self._value == other._value

    def __lt__(self, other: "NonZero") -> bool:
        if not isinstance(other, NonZero):
            return NotImplemented
        self._require_same_domain(other, "<")
        return self._value < other._value

    # Изменяемый value object
    __hash__ = None  # type: ignore[assignment]

    # -------------------------------------------------------------------------
    # Битовые запросы
    # -------------------------------------------------------------------------

    def _resolve_width(self, width: Optional[int], query: str) -> int:
        if width is not None:
            return width
        if self._domain.bits is None:
            raise DomainCapabilityError(
                f"{query} is undefined for {self._domain} without an explicit width"
            )
        return self._domain.bits

    def is_even(self) -> bool:
        return self._value & 1 == 0

    def is_odd(self) -> bool:
        return self._value & 1 == 1

    def trailing_zeros(self) -> int:
        return trailing_zeros(self._value)

    def trailing_ones(self) -> int:
        return trailing_ones(self._value)

    def leading_zeros(self, width: Optional[int] = None) -> int:
        """
        Количество старших нулевых битов.

        Args:
            width: Разрядность представления. Для фиксированных доменов по
                умолчанию равна bits домена; для biguint обязательна.

        Raises:
            DomainCapabilityError: biguint без явного width
            ValueError: Значение не помещается в width
        """
        return leading_zeros(self._value, self._resolve_width(width, "leading_zeros"))

    def leading_ones(self, width: Optional[int] = None) -> int:
        """Количество старших единичных битов (width как в leading_zeros)."""
        return leading_ones(self._value, self._resolve_width(width, "leading_ones"))

    def count_ones(self) -> int:
        return count_ones(self._value)

    def bit_length(self) -> int:
        return self._value.bit_length()

    def without_trailing_zeros(self) -> "NonZero":
        """
        Сдвиг вправо на число trailing zeros (наибольший нечётный делитель).

        Examples:
            >>> NonZero.new(166).without_trailing_zeros().get()
            83
            >>> NonZero.new(128).without_trailing_zeros().get()
            1
        """
        return self._from_trusted(strip_trailing_zeros(self._value), self._domain)

    # -------------------------------------------------------------------------
    # Конверсия и отображение
    # -------------------------------------------------------------------------

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return True

    def __str__(self) -> str:
        return str(self._value)

    def __format__(self, format_spec: str) -> str:
        return format(self._value, format_spec)

    def __repr__(self) -> str:
        return f"NonZero({self._value}, {self._domain.name})"


def to_nonzero(value: int, domain: UintDomain = BIGUINT) -> Optional[NonZero]:
    """Функциональная форма NonZero.new()."""
    return NonZero.new(value, domain)
