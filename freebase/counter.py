"""CounterService: configurable, localized welcome banner plus a cache-first visit counter.

One run() per enable. Reads fan out concurrently, banner lines go out strictly
in order, and the counter is written through the cache after rendering.
"""

import asyncio
import logging
import math
from typing import Any, Awaitable, TypeVar

from freebase.cache import CounterCache
from freebase.contract import (
    ConfigurationPort,
    ErrorHandlingPort,
    LocalizationPort,
    PlatformPort,
    StoragePort,
)
from freebase.errors import (
    ConfigurationError,
    LocalizationError,
    PluginError,
    SchedulingError,
    StorageLoadError,
    StorageSaveError,
)
from freebase.models import SaveResult
from freebase.platform_log import INFO, WARN, emit

logger = logging.getLogger(__name__)

T = TypeVar("T")

STORAGE_KEY = "welcome.count"
LOG_SOURCE = "WelcomeService"
DEFAULT_BANNER_WIDTH = 60


def parse_count(raw: Any) -> int:
    """Storage scalar -> non-negative int. Unparseable values, bools and non-finite floats count as 0."""
    if isinstance(raw, bool):
        return 0
    if isinstance(raw, float):
        if not math.isfinite(raw):
            return 0
        value = int(raw)
    elif isinstance(raw, int):
        value = raw
    elif isinstance(raw, str):
        try:
            value = int(raw.strip())
        except ValueError:
            return 0
    else:
        return 0
    return max(value, 0)


def _noop() -> None:
    return None


class CounterService:
    """Welcome banner + durable counter behind a per-instance cache."""

    def __init__(
        self,
        configuration: ConfigurationPort,
        localization: LocalizationPort,
        storage: StoragePort,
        platform: PlatformPort,
        error_handling: ErrorHandlingPort,
        *,
        storage_key: str = STORAGE_KEY,
        banner_width: int = DEFAULT_BANNER_WIDTH,
    ) -> None:
        self._configuration = configuration
        self._localization = localization
        self._storage = storage
        self._platform = platform
        self._error_handling = error_handling
        self._storage_key = storage_key
        self._banner_width = banner_width
        self._cache = CounterCache()
        self.last_load_error: StorageLoadError | None = None
        self._run_lock = asyncio.Lock()

    @property
    def cache(self) -> CounterCache:
        return self._cache

    @property
    def storage_key(self) -> str:
        return self._storage_key

    async def run(self) -> None:
        """Show the welcome banner once and bump the counter.

        Concurrent calls on the same instance are serialized so banners never interleave.
        """
        async with self._run_lock:
            enabled = await self._config(
                self._configuration.get_boolean("welcome.enabled", True)
            )
            if not enabled:
                await self._log(INFO, "Welcome message disabled by configuration")
                return
            delay_seconds = await self._config(
                self._configuration.get_integer("welcome.delay_seconds", 0)
            )
            await self._apply_delay(delay_seconds)
            await self._render_welcome()

    show_welcome_message = run

    async def reload(self) -> None:
        """Drop every cached counter. Storage is untouched."""
        self._cache.clear()

    async def shutdown(self) -> None:
        """Nothing to release."""

    async def load_count(self) -> int:
        """Cache-first read. Storage failures degrade to 0 with a warning.

        The recovered failure is kept in last_load_error until the next successful load.
        """
        cached = self._cache.get(self._storage_key)
        if cached is not None:
            return cached
        try:
            raw = await self._storage.load(self._storage_key)
        except Exception as e:
            logger.warning("Failed to load %s", self._storage_key, exc_info=e)
            self.last_load_error = StorageLoadError(f"failed to load {self._storage_key}: {e}")
            await self._log(WARN, "Failed to load welcome count, defaulting to 0")
            self._cache.put(self._storage_key, 0)
            return 0
        self.last_load_error = None
        value = parse_count(raw)
        self._cache.put(self._storage_key, value)
        return value

    async def increment_count(self, next_value: int) -> SaveResult:
        """Write-through: cache first, then storage. Save failures are reported, not raised."""
        self._cache.put(self._storage_key, next_value)
        try:
            await self._storage.save(self._storage_key, next_value)
        except Exception as e:
            err = StorageSaveError("Failed to save welcome count")
            err.__cause__ = e
            await self._error_handling.log_error(err.kind.value, str(err), e)
            return SaveResult(
                key=self._storage_key, value=next_value, saved=False, error=err
            )
        return SaveResult(key=self._storage_key, value=next_value, saved=True)

    async def _render_welcome(self) -> None:
        title, default_message, tip, custom_message, show_tips, count = (
            await asyncio.gather(
                self._message("welcome.title"),
                self._message("welcome.message"),
                self._message("welcome.tip"),
                self._config(self._configuration.get_string("welcome.message", "")),
                self._config(self._configuration.get_boolean("welcome.show_tips", True)),
                self.load_count(),
            )
        )
        message = custom_message if custom_message and custom_message.strip() else default_message
        await self._log_banner(title, message, tip, bool(show_tips), count)
        await self.increment_count(count + 1)

    async def _log_banner(
        self, title: str, message: str, tip: str, show_tips: bool, count: int
    ) -> None:
        line = "=" * self._banner_width
        lines = [line, title, "-" * self._banner_width, message, f"Welcome count: {count}"]
        if show_tips and tip and tip.strip():
            lines.append(f"Tip: {tip}")
        lines.append(line)
        for text in lines:
            await self._log(INFO, text)

    async def _apply_delay(self, delay_seconds: int) -> None:
        if delay_seconds <= 0:
            return
        try:
            await self._platform.schedule_task(_noop, delay_seconds * 1000)
        except Exception as e:
            raise SchedulingError(
                f"startup delay of {delay_seconds}s could not be scheduled"
            ) from e

    async def _config(self, call: Awaitable[T]) -> T:
        try:
            return await call
        except PluginError:
            raise
        except Exception as e:
            raise ConfigurationError(f"configuration read failed: {e}") from e

    async def _message(self, message_id: str) -> str:
        try:
            return await self._localization.get_message(message_id)
        except PluginError:
            raise
        except Exception as e:
            raise LocalizationError(f"no message for {message_id!r}: {e}") from e

    async def _log(self, level: str, message: str) -> None:
        await emit(self._platform, LOG_SOURCE, level, message)
