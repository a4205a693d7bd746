"""Plugin protocols: collaborator ports and the lifecycle contract.

The plugin never imports a concrete host implementation. Everything it needs
arrives through these capability interfaces, handed out by PluginCore.
"""

from typing import Any, Callable, Protocol, runtime_checkable

from freebase.models import PluginState


@runtime_checkable
class ConfigurationPort(Protocol):
    """Typed configuration reads. Getters return the default when the key is absent or unparseable."""

    async def get_boolean(self, key: str, default: bool) -> bool: ...

    async def get_integer(self, key: str, default: int) -> int: ...

    async def get_string(self, key: str, default: str) -> str: ...

    async def reload(self) -> None:
        """Re-read the backing source. May fail."""


@runtime_checkable
class LocalizationPort(Protocol):
    """Localized message lookup."""

    async def get_message(self, message_id: str) -> str:
        """Return the localized string for message_id. Failure propagates."""

    async def reload(self) -> None:
        """Reload the catalog. May fail."""


@runtime_checkable
class StoragePort(Protocol):
    """Durable key/value storage."""

    async def load(self, key: str) -> Any:
        """Return the stored scalar. Raises when absent or unreachable."""

    async def save(self, key: str, value: Any) -> None:
        """Persist value under key. May raise."""


@runtime_checkable
class PlatformPort(Protocol):
    """Host platform: structured logging and delayed tasks."""

    async def log(self, source: str, level: str, message: str) -> None:
        """Best-effort log line. Callers must tolerate failure."""

    async def schedule_task(self, action: Callable[[], Any], delay_millis: int) -> None:
        """Run action after delay_millis and complete. Failure propagates."""


@runtime_checkable
class ErrorHandlingPort(Protocol):
    """Sink for non-fatal errors."""

    async def log_error(
        self, kind: str, message: str, cause: BaseException | None
    ) -> None:
        """Record the error. Always succeeds from the caller's perspective."""


@runtime_checkable
class PluginCore(Protocol):
    """Host handle the coordinator acquires collaborators from. Getters may raise."""

    async def initialize(self) -> None: ...

    def get_configuration(self) -> ConfigurationPort: ...

    def get_localization(self) -> LocalizationPort: ...

    def get_storage(self) -> StoragePort: ...

    def get_platform(self) -> PlatformPort: ...

    def get_error_handling(self) -> ErrorHandlingPort: ...


@runtime_checkable
class PluginLifecycle(Protocol):
    """What the host drives: enable, disable, reload, state query."""

    async def enable(self) -> None: ...

    async def disable(self) -> None: ...

    async def reload(self) -> None: ...

    def get_current_state(self) -> PluginState:
        """Current state. Never blocks, never fails."""
