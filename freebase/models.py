"""Plugin state and counter value types."""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from freebase.errors import StorageSaveError

__all__ = ["CounterEntry", "PluginState", "SaveResult"]


class PluginState(Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    ACTIVE = "active"
    DISABLING = "disabling"
    DISABLED = "disabled"


@dataclass(frozen=True)
class CounterEntry:
    """Named non-negative counter. cached=True once loaded or written in this process."""

    key: str
    value: int
    cached: bool = False


@dataclass(frozen=True)
class SaveResult:
    """Outcome of a write-through. error is set only when saved is False."""

    key: str
    value: int
    saved: bool
    error: "StorageSaveError | None" = None
