"""Free base plugin: lifecycle coordinator and cache-first welcome counter."""

from freebase.cache import CounterCache
from freebase.contract import (
    ConfigurationPort,
    ErrorHandlingPort,
    LocalizationPort,
    PlatformPort,
    PluginCore,
    PluginLifecycle,
    StoragePort,
)
from freebase.coordinator import LifecycleCoordinator
from freebase.counter import CounterService
from freebase.errors import (
    ConfigurationError,
    ErrorKind,
    LifecycleError,
    LocalizationError,
    PlatformLogError,
    PluginError,
    SchedulingError,
    StorageLoadError,
    StorageSaveError,
)
from freebase.manifest import DEFAULT_METADATA, PluginMetadata, load_manifest
from freebase.models import CounterEntry, PluginState, SaveResult
from freebase.settings import PluginSettings, load_settings

__all__ = [
    "ConfigurationError",
    "ConfigurationPort",
    "CounterCache",
    "CounterEntry",
    "CounterService",
    "DEFAULT_METADATA",
    "ErrorHandlingPort",
    "ErrorKind",
    "LifecycleCoordinator",
    "LifecycleError",
    "LocalizationError",
    "LocalizationPort",
    "PlatformLogError",
    "PlatformPort",
    "PluginCore",
    "PluginError",
    "PluginLifecycle",
    "PluginMetadata",
    "PluginSettings",
    "PluginState",
    "SaveResult",
    "SchedulingError",
    "StorageLoadError",
    "StorageSaveError",
    "StoragePort",
    "load_manifest",
    "load_settings",
]
