"""
Тесты для ArithmeticConfig

Проверяет:
1. Значения по умолчанию
2. Замену и восстановление активной конфигурации
3. Контекстный менеджер arithmetic_config (в т.ч. перекрывающиеся блоки)
4. Изоляцию конфигурации между потоками и контекстами
5. Логирование смены конфигурации
"""

import contextvars
import importlib
import threading
import types
from typing import Iterator, List

import pytest
from loguru import logger
from pydantic import ValidationError

from src.core.domain.arithmetic_settings import (
    ArithmeticConfig,
    arithmetic_config,
    get_arithmetic_config,
    set_arithmetic_config,
)
from src.core.domain.nonzero import NonZero, NonZeroOverflowViolation
from src.core.domain.uint_domain import U8

# Таймаут ожидания событий между потоками, секунды
THREAD_TIMEOUT = 5.0


@pytest.fixture
def log_messages() -> Iterator[List[str]]:
    """Сообщения loguru уровня INFO и выше"""
    messages: List[str] = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="INFO")
    yield messages
    logger.remove(handler_id)


class TestArithmeticConfigModel:
    """Тесты Pydantic модели"""

    def test_defaults(self) -> None:
        assert ArithmeticConfig().overflow_checks is True

    def test_active_default_has_overflow_checks(self) -> None:
        assert get_arithmetic_config().overflow_checks is True

    def test_frozen(self) -> None:
        config = ArithmeticConfig()
        with pytest.raises(ValidationError):
            config.overflow_checks = False  # type: ignore[misc]

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ArithmeticConfig(wrapping=True)  # type: ignore[call-arg]


class TestSetArithmeticConfig:
    """Тесты для set_arithmetic_config"""

    def test_returns_previous(self) -> None:
        original = get_arithmetic_config()
        previous = set_arithmetic_config(ArithmeticConfig(overflow_checks=False))
        try:
            assert previous == original
            assert get_arithmetic_config().overflow_checks is False
        finally:
            set_arithmetic_config(previous)
        assert get_arithmetic_config() == original

    def test_wrong_type_rejected(self) -> None:
        with pytest.raises(TypeError, match="ArithmeticConfig"):
            set_arithmetic_config({"overflow_checks": False})  # type: ignore[arg-type]

    def test_change_is_logged(self, log_messages: List[str]) -> None:
        previous = set_arithmetic_config(ArithmeticConfig(overflow_checks=False))
        set_arithmetic_config(previous)
        assert len([m for m in log_messages if "Arithmetic config changed" in m]) == 2

    def test_same_config_not_logged(self, log_messages: List[str]) -> None:
        set_arithmetic_config(get_arithmetic_config())
        assert log_messages == []


class TestArithmeticConfigContext:
    """Тесты для контекстного менеджера arithmetic_config"""

    def test_override_and_restore(self) -> None:
        with arithmetic_config(overflow_checks=False) as config:
            assert config.overflow_checks is False
            assert get_arithmetic_config() is config
        assert get_arithmetic_config().overflow_checks is True

    def test_restored_on_exception(self) -> None:
        with pytest.raises(RuntimeError):
            with arithmetic_config(overflow_checks=False):
                raise RuntimeError("boom")
        assert get_arithmetic_config().overflow_checks is True

    def test_nested(self) -> None:
        with arithmetic_config(overflow_checks=False):
            with arithmetic_config(overflow_checks=True):
                assert get_arithmetic_config().overflow_checks is True
            assert get_arithmetic_config().overflow_checks is False
        assert get_arithmetic_config().overflow_checks is True

    def test_unknown_override_rejected(self) -> None:
        with pytest.raises(ValidationError):
            with arithmetic_config(saturating=True):
                pass
        assert get_arithmetic_config().overflow_checks is True

    def test_overlapping_blocks_exited_out_of_order(self) -> None:
        """Enter A, enter B, exit A, exit B: проверки переполнения восстановлены"""
        block_a = arithmetic_config(overflow_checks=False)
        block_b = arithmetic_config(overflow_checks=False)

        block_a.__enter__()
        block_b.__enter__()
        block_a.__exit__(None, None, None)
        assert get_arithmetic_config().overflow_checks is False
        block_b.__exit__(None, None, None)

        assert get_arithmetic_config().overflow_checks is True
        with pytest.raises(NonZeroOverflowViolation):
            NonZero.new(255, U8) + NonZero.new(2, U8)

    def test_outer_block_exit_keeps_inner_config(self) -> None:
        """Выход внешнего блока не отменяет ещё открытый внутренний"""
        outer = arithmetic_config(overflow_checks=False)
        inner = arithmetic_config(overflow_checks=True)

        outer.__enter__()
        inner.__enter__()
        outer.__exit__(None, None, None)
        assert get_arithmetic_config().overflow_checks is True
        inner.__exit__(None, None, None)
        assert get_arithmetic_config().overflow_checks is True

    def test_set_inside_block_applies_after_exit(self) -> None:
        """Открытый блок перекрывает базовую конфигурацию до своего выхода"""
        try:
            with arithmetic_config(overflow_checks=True):
                set_arithmetic_config(ArithmeticConfig(overflow_checks=False))
                assert get_arithmetic_config().overflow_checks is True
            assert get_arithmetic_config().overflow_checks is False
        finally:
            set_arithmetic_config(ArithmeticConfig())


# =============================================================================
# ИЗОЛЯЦИЯ КОНТЕКСТОВ
# =============================================================================


class TestConfigIsolation:
    """Конфигурация принадлежит потоку / контексту, а не процессу"""

    def test_worker_thread_override_invisible_to_main(self) -> None:
        """Пока поток внутри overflow_checks=False, основной поток проверяет переполнение"""
        entered = threading.Event()
        release = threading.Event()
        seen_in_worker: List[bool] = []

        def worker() -> None:
            with arithmetic_config(overflow_checks=False):
                seen_in_worker.append(get_arithmetic_config().overflow_checks)
                entered.set()
                release.wait(THREAD_TIMEOUT)

        thread = threading.Thread(target=worker)
        thread.start()
        try:
            assert entered.wait(THREAD_TIMEOUT)
            assert get_arithmetic_config().overflow_checks is True
            with pytest.raises(NonZeroOverflowViolation):
                NonZero.new(255, U8) + NonZero.new(2, U8)
        finally:
            release.set()
            thread.join(THREAD_TIMEOUT)

        assert seen_in_worker == [False]

    def test_overlapping_blocks_in_threads(self) -> None:
        """Два потока с перекрывающимися блоками: после выхода проверки включены везде"""
        barrier = threading.Barrier(2, timeout=THREAD_TIMEOUT)
        after_exit: List[bool] = []
        lock = threading.Lock()

        def worker(hold_first: bool) -> None:
            with arithmetic_config(overflow_checks=False):
                barrier.wait()
                if hold_first:
                    barrier.wait()
            if not hold_first:
                barrier.wait()
            with lock:
                after_exit.append(get_arithmetic_config().overflow_checks)

        threads = [threading.Thread(target=worker, args=(flag,)) for flag in (True, False)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(THREAD_TIMEOUT)

        assert after_exit == [True, True]
        assert get_arithmetic_config().overflow_checks is True

    def test_set_in_copied_context_does_not_leak(self) -> None:
        """set_arithmetic_config внутри copy_context().run не меняет внешний контекст"""

        def disable_checks() -> bool:
            set_arithmetic_config(ArithmeticConfig(overflow_checks=False))
            return get_arithmetic_config().overflow_checks

        assert contextvars.copy_context().run(disable_checks) is False
        assert get_arithmetic_config().overflow_checks is True


class TestModuleImport:
    """Модуль не затеняется одноимённой функцией пакета"""

    def test_submodule_importable(self) -> None:
        module = importlib.import_module("src.core.domain.arithmetic_settings")
        assert isinstance(module, types.ModuleType)
        assert module.ArithmeticConfig is ArithmeticConfig

    def test_package_attribute_is_module(self) -> None:
        import src.core.domain as domain_package

        assert isinstance(domain_package.arithmetic_settings, types.ModuleType)
        assert callable(domain_package.arithmetic_config)
