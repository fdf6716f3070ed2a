"""
Bit Ops: битовые примитивы для беззнаковых целых

Модуль содержит чистые функции над неотрицательными Python int:
- Маски и модульное сужение до фиксированной разрядности (wrap)
- Подсчёт trailing/leading zeros и ones
- Снятие trailing zeros (наибольший нечётный делитель)

Разрядность передаётся явно параметром width/bits. width=None означает
arbitrary precision: у такого числа нет старшего бита "по умолчанию",
поэтому leading-запросы без явной разрядности не определены.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Все функции чистые и детерминированные
2. Отрицательные значения никогда не принимаются (ValueError)
3. Значение шире заданной разрядности не усекается молча (ValueError)
"""

from typing import Final, Optional

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Минимально допустимая разрядность
MIN_BITS: Final[int] = 1


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_bits(bits: int, name: str = "bits") -> int:
    """
    Проверка разрядности.

    Args:
        bits: Разрядность в битах
        name: Имя параметра для сообщения об ошибке

    Returns:
        bits без изменений

    Raises:
        ValueError: Если bits < MIN_BITS
    """
    if bits < MIN_BITS:
        raise ValueError(f"{name} must be >= {MIN_BITS}, got {bits}")
    return bits


def validate_unsigned(value: int, name: str = "value") -> int:
    """Проверка, что значение неотрицательное."""
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
    return value


def fits_in_width(value: int, bits: Optional[int]) -> bool:
    """
    Проверка, помещается ли значение в заданную разрядность.

    Args:
        value: Неотрицательное значение
        bits: Разрядность (None = arbitrary precision, помещается всё)

    Returns:
        True если 0 <= value < 2**bits
    """
    if value < 0:
        return False
    if bits is None:
        return True
    return value.bit_length() <= bits


def _require_fits(value: int, width: int) -> None:
    validate_bits(width, name="width")
    validate_unsigned(value)
    if not fits_in_width(value, width):
        raise ValueError(f"value {value} does not fit in {width} bits")


# =============================================================================
# МАСКИ И WRAP
# =============================================================================


def bit_mask(bits: int) -> int:
    """
    Маска из bits единичных битов.

    Examples:
        >>> bit_mask(8)
        255
        >>> bit_mask(1)
        1
    """
    validate_bits(bits)
    return (1 << bits) - 1


def wrap_to_width(value: int, bits: int) -> int:
    """
    Модульное сужение значения до bits бит (аналог переполнения регистра).

    Args:
        value: Произвольное неотрицательное значение (например, сумма)
        bits: Целевая разрядность

    Returns:
        value mod 2**bits

    Examples:
        >>> wrap_to_width(256, 8)
        0
        >>> wrap_to_width(300, 8)
        44
    """
    validate_unsigned(value)
    return value & bit_mask(bits)


# =============================================================================
# ПОДСЧЁТ БИТОВ
# =============================================================================


def count_ones(value: int) -> int:
    """Количество единичных битов (popcount)."""
    validate_unsigned(value)
    return bin(value).count("1")


def count_zeros(value: int, width: int) -> int:
    """Количество нулевых битов в представлении шириной width."""
    _require_fits(value, width)
    return width - count_ones(value)


def trailing_zeros(value: int, width: Optional[int] = None) -> int:
    """
    Количество нулевых битов начиная с младшего.

    Для value == 0 все биты нулевые: результат равен width. Для
    arbitrary precision (width=None) ответ не определён.

    Args:
        value: Неотрицательное значение
        width: Разрядность (None = arbitrary precision)

    Returns:
        Число trailing zeros

    Raises:
        ValueError: value == 0 при width=None, либо value не помещается в width

    Examples:
        >>> trailing_zeros(0b10100110)
        1
        >>> trailing_zeros(128)
        7
        >>> trailing_zeros(0, width=16)
        16
    """
    if width is not None:
        _require_fits(value, width)
    else:
        validate_unsigned(value)

    if value == 0:
        if width is None:
            raise ValueError("trailing_zeros of 0 is undefined without a width")
        return width

    # value & -value изолирует младший единичный бит
    return (value & -value).bit_length() - 1


def trailing_ones(value: int) -> int:
    """
    Количество единичных битов начиная с младшего.

    Examples:
        >>> trailing_ones(0b0111)
        3
        >>> trailing_ones(0b0110)
        0
    """
    validate_unsigned(value)
    return trailing_zeros(~value & (value + 1)) if value else 0


def leading_zeros(value: int, width: int) -> int:
    """
    Количество нулевых битов начиная со старшего в представлении шириной width.

    Args:
        value: Неотрицательное значение
        width: Разрядность (обязательна)

    Returns:
        width - value.bit_length()

    Examples:
        >>> leading_zeros(1, 8)
        7
        >>> leading_zeros(255, 8)
        0
    """
    _require_fits(value, width)
    return width - value.bit_length()


def leading_ones(value: int, width: int) -> int:
    """
    Количество единичных битов начиная со старшего в представлении шириной width.

    Examples:
        >>> leading_ones(0b11100000, 8)
        3
        >>> leading_ones(0b01111111, 8)
        0
    """
    _require_fits(value, width)
    return leading_zeros(value ^ bit_mask(width), width)


# =============================================================================
# ПРЕОБРАЗОВАНИЯ
# =============================================================================


def strip_trailing_zeros(value: int) -> int:
    """
    Сдвиг вправо на число trailing zeros: наибольший нечётный делитель.

    Args:
        value: Положительное значение

    Returns:
        value >> trailing_zeros(value) (всегда нечётное и > 0)

    Raises:
        ValueError: Если value == 0 (у нуля нет нечётного делителя)

    Examples:
        >>> strip_trailing_zeros(166)
        83
        >>> strip_trailing_zeros(128)
        1
    """
    if value == 0:
        raise ValueError("cannot strip trailing zeros from 0")
    return value >> trailing_zeros(value)
