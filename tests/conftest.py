"""In-memory collaborators for plugin tests."""

import logging
from typing import Any, Callable

import pytest

from freebase.counter import CounterService


class FakeConfiguration:
    def __init__(self, values: dict[str, Any] | None = None) -> None:
        self.values: dict[str, Any] = dict(values or {})
        self.reads: list[str] = []
        self.reload_error: Exception | None = None
        self.reload_calls = 0

    async def get_boolean(self, key: str, default: bool) -> bool:
        self.reads.append(key)
        value = self.values.get(key, default)
        return value if isinstance(value, bool) else default

    async def get_integer(self, key: str, default: int) -> int:
        self.reads.append(key)
        value = self.values.get(key, default)
        return value if isinstance(value, int) else default

    async def get_string(self, key: str, default: str) -> str:
        self.reads.append(key)
        return str(self.values.get(key, default))

    async def reload(self) -> None:
        self.reload_calls += 1
        if self.reload_error:
            raise self.reload_error


class FakeLocalization:
    def __init__(self, messages: dict[str, str] | None = None) -> None:
        self.messages: dict[str, str] = dict(messages or {})
        self.lookups: list[str] = []
        self.reload_error: Exception | None = None
        self.reload_calls = 0

    async def get_message(self, message_id: str) -> str:
        self.lookups.append(message_id)
        return self.messages[message_id]

    async def reload(self) -> None:
        self.reload_calls += 1
        if self.reload_error:
            raise self.reload_error


class FakeStorage:
    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self.data: dict[str, Any] = dict(data or {})
        self.loads: list[str] = []
        self.saves: list[tuple[str, Any]] = []
        self.load_error: Exception | None = None
        self.save_error: Exception | None = None

    async def load(self, key: str) -> Any:
        self.loads.append(key)
        if self.load_error:
            raise self.load_error
        if key not in self.data:
            raise KeyError(key)
        return self.data[key]

    async def save(self, key: str, value: Any) -> None:
        self.saves.append((key, value))
        if self.save_error:
            raise self.save_error
        self.data[key] = value


class FakePlatform:
    def __init__(self) -> None:
        self.lines: list[tuple[str, str, str]] = []
        self.scheduled: list[int] = []
        self.log_error: Exception | None = None
        self.schedule_error: Exception | None = None

    async def log(self, source: str, level: str, message: str) -> None:
        if self.log_error:
            raise self.log_error
        self.lines.append((source, level, message))

    async def schedule_task(self, action: Callable[[], Any], delay_millis: int) -> None:
        if self.schedule_error:
            raise self.schedule_error
        self.scheduled.append(delay_millis)
        action()

    def messages(self, source: str | None = None) -> list[str]:
        return [m for s, _, m in self.lines if source is None or s == source]


class FakeErrorHandling:
    def __init__(self) -> None:
        self.errors: list[tuple[str, str, BaseException | None]] = []

    async def log_error(
        self, kind: str, message: str, cause: BaseException | None
    ) -> None:
        self.errors.append((kind, message, cause))


class FakeCore:
    def __init__(
        self,
        configuration: FakeConfiguration,
        localization: FakeLocalization,
        storage: FakeStorage,
        platform: FakePlatform,
        error_handling: FakeErrorHandling,
    ) -> None:
        self.configuration = configuration
        self.localization = localization
        self.storage = storage
        self.platform = platform
        self.error_handling = error_handling
        self.initialized = False
        self.acquire_error: Exception | None = None

    async def initialize(self) -> None:
        self.initialized = True

    def get_configuration(self) -> FakeConfiguration:
        if self.acquire_error:
            raise self.acquire_error
        return self.configuration

    def get_localization(self) -> FakeLocalization:
        return self.localization

    def get_storage(self) -> FakeStorage:
        return self.storage

    def get_platform(self) -> FakePlatform:
        return self.platform

    def get_error_handling(self) -> FakeErrorHandling:
        return self.error_handling


MESSAGES = {
    "welcome.title": "Welcome to the server",
    "welcome.message": "Glad to have you here.",
    "welcome.tip": "Use /help",
}


@pytest.fixture
def configuration() -> FakeConfiguration:
    return FakeConfiguration()


@pytest.fixture
def localization() -> FakeLocalization:
    return FakeLocalization(MESSAGES)


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def platform() -> FakePlatform:
    return FakePlatform()


@pytest.fixture
def error_handling() -> FakeErrorHandling:
    return FakeErrorHandling()


@pytest.fixture
def core(
    configuration: FakeConfiguration,
    localization: FakeLocalization,
    storage: FakeStorage,
    platform: FakePlatform,
    error_handling: FakeErrorHandling,
) -> FakeCore:
    return FakeCore(configuration, localization, storage, platform, error_handling)


@pytest.fixture
def service(
    configuration: FakeConfiguration,
    localization: FakeLocalization,
    storage: FakeStorage,
    platform: FakePlatform,
    error_handling: FakeErrorHandling,
) -> CounterService:
    return CounterService(configuration, localization, storage, platform, error_handling)


@pytest.fixture
def restore_root_logger():
    """Put back the root logger's handlers and level after setup_logging replaced them."""
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    yield root
    for h in root.handlers[:]:
        if h not in saved_handlers:
            root.removeHandler(h)
            h.close()
    for h in saved_handlers:
        if h not in root.handlers:
            root.addHandler(h)
    root.setLevel(saved_level)
