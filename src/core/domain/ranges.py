"""
NonZeroRange: Ленивая возрастающая последовательность NonZero

Конечный forward-only iterator между start и stop одного домена.

Семантика шага (increment-then-yield):
- если current < stop: current += 1, выдаётся копия нового current
- иначе: конец последовательности (StopIteration / None), навсегда

Следствие: значение start никогда не выдаётся, а stop выдаётся последним.
Например, start=1, stop=5 даёт [2, 3, 4, 5]. Перевёрнутый диапазон
(start >= stop) пуст. Перезапуск возможен только созданием нового диапазона.
"""

from typing import Optional

from loguru import logger

from src.core.domain.nonzero import DomainMismatchError, NonZero
from src.core.domain.uint_domain import BIGUINT, UintDomain


class NonZeroRange:
    """
    Итератор по NonZero от start (исключительно) до stop (включительно).

    Examples:
        >>> [n.get() for n in NonZeroRange.from_raw(1, 5)]
        [2, 3, 4, 5]
    """

    __slots__ = ("_start", "_stop", "_current", "_step", "_exhausted")

    def __init__(self, start: NonZero, stop: NonZero) -> None:
        """
        Args:
            start: Начальное значение курсора (само не выдаётся)
            stop: Граница; порядок start <= stop не проверяется

        Raises:
            TypeError: Если границы не NonZero
            DomainMismatchError: Если границы из разных доменов
        """
        if not isinstance(start, NonZero) or not isinstance(stop, NonZero):
            raise TypeError(
                f"NonZeroRange bounds must be NonZero, got "
                f"{type(start).__name__} and {type(stop).__name__}"
            )
        if start.domain != stop.domain:
            raise DomainMismatchError(
                f"NonZeroRange bounds from different domains: {start.domain} and {stop.domain}"
            )

        # Копии: внешние мутации границ не влияют на диапазон
        self._start = start.copy()
        self._stop = stop.copy()
        self._current = start.copy()
        self._step = NonZero.one(start.domain)
        self._exhausted = False

    @classmethod
    def from_raw(
        cls, start: int, stop: int, domain: UintDomain = BIGUINT
    ) -> Optional["NonZeroRange"]:
        """
        Диапазон из сырых значений домена.

        Returns:
            NonZeroRange, либо None если хотя бы одна граница равна нулю
        """
        start_nz = NonZero.new(start, domain)
        stop_nz = NonZero.new(stop, domain)
        if start_nz is None or stop_nz is None:
            return None
        return cls(start_nz, stop_nz)

    @property
    def start(self) -> NonZero:
        return self._start.copy()

    @property
    def stop(self) -> NonZero:
        return self._stop.copy()

    @property
    def current(self) -> NonZero:
        """Текущее положение курсора (копия)."""
        return self._current.copy()

    @property
    def domain(self) -> UintDomain:
        return self._start.domain

    def next_value(self) -> Optional[NonZero]:
        """
        Один шаг итерации без exception.

        Returns:
            Следующее значение, либо None если диапазон исчерпан
            (и все последующие вызовы тоже вернут None)
        """
        if self._current < self._stop:
            # current < stop <= max_value домена: инкремент не переполняется
            self._current += self._step
            return self._current.copy()

        if not self._exhausted:
            self._exhausted = True
            logger.debug("NonZeroRange exhausted at {} (stop={})", self._current, self._stop)
        return None

    def __iter__(self) -> "NonZeroRange":
        return self

    def __next__(self) -> NonZero:
        value = self.next_value()
        if value is None:
            raise StopIteration
        return value

    def __length_hint__(self) -> int:
        if self._current < self._stop:
            return self._stop.get() - self._current.get()
        return 0

    def __repr__(self) -> str:
        return (
            f"NonZeroRange(start={self._start}, stop={self._stop}, "
            f"current={self._current}, domain={self.domain.name})"
        )
