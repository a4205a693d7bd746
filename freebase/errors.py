"""Error taxonomy for the plugin.

Propagated: ConfigurationError, LocalizationError, SchedulingError, LifecycleError.
Recovered where raised: StorageLoadError, StorageSaveError, PlatformLogError.
"""

from enum import Enum


class ErrorKind(str, Enum):
    CONFIGURATION = "ConfigurationError"
    LOCALIZATION = "LocalizationError"
    STORAGE_LOAD = "StorageLoadError"
    STORAGE_SAVE = "StorageSaveError"
    PLATFORM_LOG = "PlatformLogError"
    SCHEDULING = "SchedulingError"
    LIFECYCLE = "LifecycleError"


class PluginError(Exception):
    """Base class. kind identifies the taxonomy entry for error reporting."""

    kind: ErrorKind


class ConfigurationError(PluginError):
    """Configuration read or reload failed."""

    kind = ErrorKind.CONFIGURATION


class LocalizationError(PluginError):
    """Message lookup or catalog reload failed."""

    kind = ErrorKind.LOCALIZATION


class StorageLoadError(PluginError):
    """Counter could not be read from storage. Recovered with a default of 0."""

    kind = ErrorKind.STORAGE_LOAD


class StorageSaveError(PluginError):
    """Counter could not be written. Reported, never raised to run() callers."""

    kind = ErrorKind.STORAGE_SAVE


class PlatformLogError(PluginError):
    """Platform log call failed. Recovered with a local console write."""

    kind = ErrorKind.PLATFORM_LOG


class SchedulingError(PluginError):
    """Delayed task could not be scheduled or failed."""

    kind = ErrorKind.SCHEDULING


class LifecycleError(PluginError):
    """Invalid transition or collaborator acquisition failure."""

    kind = ErrorKind.LIFECYCLE
