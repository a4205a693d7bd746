"""LifecycleCoordinator: host-driven state machine owning the CounterService.

uninitialized -> initializing -> active <-> disabled (via disabling).
Each transition emits exactly one platform log line.
"""

import logging
from pathlib import Path
from typing import Awaitable, Callable

from freebase.contract import (
    ConfigurationPort,
    ErrorHandlingPort,
    LocalizationPort,
    PlatformPort,
    PluginCore,
    StoragePort,
)
from freebase.counter import CounterService
from freebase.errors import (
    ConfigurationError,
    LifecycleError,
    LocalizationError,
    PluginError,
)
from freebase.logging_config import setup_logging
from freebase.manifest import DEFAULT_METADATA, MANIFEST_FILE, PluginMetadata, load_manifest
from freebase.models import PluginState
from freebase.platform_log import ERROR, INFO, WARN, emit
from freebase.settings import PluginSettings, load_settings

logger = logging.getLogger(__name__)

_ENABLE_FROM = frozenset({PluginState.UNINITIALIZED, PluginState.DISABLED})

CounterServiceFactory = Callable[..., CounterService]


async def _reload_step(
    call: Awaitable[None], error_cls: type[PluginError], what: str
) -> None:
    try:
        await call
    except PluginError:
        raise
    except Exception as e:
        raise error_cls(f"{what} reload failed: {e}") from e


class LifecycleCoordinator:
    """Drives enable/disable/reload against a PluginCore; delegates domain work to CounterService."""

    def __init__(
        self,
        core: PluginCore,
        metadata: PluginMetadata | None = None,
        settings: PluginSettings | None = None,
        service_factory: CounterServiceFactory = CounterService,
    ) -> None:
        self._core = core
        self._metadata = metadata or DEFAULT_METADATA
        self._settings = settings or PluginSettings()
        self._service_factory = service_factory
        self._state = PluginState.UNINITIALIZED

        self._configuration: ConfigurationPort | None = None
        self._localization: LocalizationPort | None = None
        self._storage: StoragePort | None = None
        self._platform: PlatformPort | None = None
        self._error_handling: ErrorHandlingPort | None = None
        self._counter: CounterService | None = None

    @property
    def metadata(self) -> PluginMetadata:
        return self._metadata

    @property
    def settings(self) -> PluginSettings:
        return self._settings

    @property
    def counter_service(self) -> CounterService | None:
        """Service built by the last enable(); None before that."""
        return self._counter

    def get_current_state(self) -> PluginState:
        return self._state

    def health_check(self) -> bool:
        """True = enabled and running."""
        return self._state is PluginState.ACTIVE

    async def start(self, plugin_dir: Path | None = None) -> None:
        """Initialize the host core, then enable.

        With plugin_dir, settings, metadata and logging are first loaded from it.
        """
        if plugin_dir is not None:
            self._configure_from(plugin_dir)
        await self._core.initialize()
        await self.enable()

    async def enable(self) -> None:
        """Acquire collaborators and show the welcome banner.

        Acquisition or service construction failure: state stays INITIALIZING,
        LifecycleError raised.
        run() failure: state becomes ACTIVE anyway, the error is re-raised.
        """
        if self._state not in _ENABLE_FROM:
            raise LifecycleError(f"cannot enable from state {self._state.value}")
        self._state = PluginState.INITIALIZING
        try:
            self._capture_core_services()
            self._counter = self._create_counter_service()
        except Exception as e:
            self._counter = None
            await self._log("enable", ERROR, f"Plugin enable failed: {e}")
            raise LifecycleError(f"enable failed: {e}") from e

        try:
            await self._counter.run()
        except Exception as e:
            self._state = PluginState.ACTIVE
            await self._log("enable", WARN, f"Plugin enabled with errors: {e}")
            raise
        self._state = PluginState.ACTIVE
        await self._log("enable", INFO, "Plugin enabled")

    async def disable(self) -> None:
        """Shut the counter service down if one exists. Allowed from any state."""
        self._state = PluginState.DISABLING
        if self._counter is not None:
            await self._counter.shutdown()
        self._state = PluginState.DISABLED
        await self._log("disable", INFO, "Plugin disabled")

    async def reload(self) -> None:
        """Reload configuration, then localization, then the counter cache. No rollback."""
        if (
            self._configuration is None
            or self._localization is None
            or self._counter is None
        ):
            raise LifecycleError("reload requires a prior enable()")
        try:
            await _reload_step(self._configuration.reload(), ConfigurationError, "configuration")
            await _reload_step(self._localization.reload(), LocalizationError, "localization")
            await self._counter.reload()
        except Exception as e:
            await self._log("reload", ERROR, f"Plugin reload failed: {e}")
            raise
        await self._log("reload", INFO, "Plugin reloaded")

    def _configure_from(self, plugin_dir: Path) -> None:
        self._settings = load_settings(plugin_dir)
        manifest_path = plugin_dir / MANIFEST_FILE
        if manifest_path.exists():
            try:
                self._metadata = load_manifest(manifest_path)
            except Exception as e:
                raise LifecycleError(f"invalid plugin manifest {manifest_path}: {e}") from e
        log_path = setup_logging(
            plugin_dir, self._settings.logging, self._settings.environment
        )
        logger.info(
            "Starting %s %s (%s), logging to %s",
            self._metadata.id,
            self._metadata.version,
            self._settings.environment,
            log_path,
        )

    def _capture_core_services(self) -> None:
        self._configuration = self._core.get_configuration()
        self._localization = self._core.get_localization()
        self._error_handling = self._core.get_error_handling()
        self._platform = self._core.get_platform()
        self._storage = self._core.get_storage()

    def _create_counter_service(self) -> CounterService:
        assert self._configuration is not None
        assert self._localization is not None
        assert self._storage is not None
        assert self._platform is not None
        assert self._error_handling is not None
        return self._service_factory(
            self._configuration,
            self._localization,
            self._storage,
            self._platform,
            self._error_handling,
            storage_key=self._settings.welcome.storage_key,
            banner_width=self._settings.welcome.banner_width,
        )

    async def _log(self, transition: str, level: str, message: str) -> None:
        logger.debug(
            "%s: %s",
            self._metadata.id,
            message,
            extra={"transition": transition, "state": self._state.value},
        )
        await emit(self._platform, self._metadata.name, level, message)
