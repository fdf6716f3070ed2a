"""
ArithmeticConfig: Конфигурация арифметики NonZero

Immutable Pydantic модель с параметрами поведения операторов NonZero на
доменах с фиксированной разрядностью.

Режимы:
- overflow_checks=True (default): переполнение в + и * -> NonZeroOverflowViolation
- overflow_checks=False: результат сужается по модулю 2**bits (wrap);
  если после wrap получился ноль -> NonZeroInvariantViolation

Активная конфигурация хранится в ContextVar: у каждого потока и каждой
asyncio task своя копия, смена в одном контексте не видна в других.

Временные переопределения (arithmetic_config()) образуют стек внутри
контекста. Блок при выходе снимает только свою запись, поэтому
перекрывающиеся блоки, закрытые не в LIFO порядке, не оставляют после
себя чужую конфигурацию.
"""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterator, Tuple

from loguru import logger
from pydantic import BaseModel, Field


class ArithmeticConfig(BaseModel):
    """Параметры арифметики NonZero."""

    overflow_checks: bool = Field(
        default=True,
        description="Проверять переполнение фиксированной разрядности в + и *",
    )

    model_config = {"frozen": True, "extra": "forbid"}


class _Override:
    """Запись стека переопределений; сравнивается по identity."""

    __slots__ = ("config",)

    def __init__(self, config: ArithmeticConfig) -> None:
        self.config = config


# =============================================================================
# АКТИВНАЯ КОНФИГУРАЦИЯ (per context)
# =============================================================================

_BASE_CONFIG: ContextVar[ArithmeticConfig] = ContextVar(
    "_BASE_CONFIG", default=ArithmeticConfig()
)
_OVERRIDES: ContextVar[Tuple[_Override, ...]] = ContextVar("_OVERRIDES", default=())


def get_arithmetic_config() -> ArithmeticConfig:
    """Активная конфигурация текущего контекста."""
    overrides = _OVERRIDES.get()
    if overrides:
        return overrides[-1].config
    return _BASE_CONFIG.get()


def set_arithmetic_config(config: ArithmeticConfig) -> ArithmeticConfig:
    """
    Замена базовой конфигурации текущего контекста.

    Открытые блоки arithmetic_config() продолжают действовать поверх новой
    базы до своего выхода.

    Args:
        config: Новая конфигурация

    Returns:
        Предыдущая базовая конфигурация (для последующего восстановления)

    Raises:
        TypeError: Если config не ArithmeticConfig
    """
    if not isinstance(config, ArithmeticConfig):
        raise TypeError(f"config must be ArithmeticConfig, got {type(config).__name__}")

    previous = _BASE_CONFIG.get()
    _BASE_CONFIG.set(config)
    if previous != config:
        logger.info("Arithmetic config changed: {} -> {}", previous, config)
    return previous


@contextmanager
def arithmetic_config(**overrides: Any) -> Iterator[ArithmeticConfig]:
    """
    Временная смена конфигурации на время блока with.

    Новая конфигурация строится поверх активной. Изменение видно только в
    текущем контексте (потоке / asyncio task).

    Examples:
        >>> with arithmetic_config(overflow_checks=False):
        ...     pass

    Raises:
        ValidationError: Если передано неизвестное поле
    """
    config = ArithmeticConfig(**{**get_arithmetic_config().model_dump(), **overrides})
    entry = _Override(config)
    _OVERRIDES.set(_OVERRIDES.get() + (entry,))
    logger.debug("Arithmetic config override entered: {}", config)
    try:
        yield config
    finally:
        _OVERRIDES.set(tuple(item for item in _OVERRIDES.get() if item is not entry))
        logger.debug("Arithmetic config override exited: {}", config)
