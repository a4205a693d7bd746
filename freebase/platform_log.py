"""Best-effort logging through PlatformPort with a local console fallback."""

import logging

from freebase.contract import PlatformPort
from freebase.errors import PlatformLogError

logger = logging.getLogger(__name__)

INFO = "INFO"
WARN = "WARN"
ERROR = "ERROR"


def fallback_write(level: str, message: str) -> None:
    """Minimal local write used when the platform log is unavailable."""
    print(f"[{level}] {message}")


async def emit(
    platform: PlatformPort | None, source: str, level: str, message: str
) -> PlatformLogError | None:
    """Send one line to the platform log.

    Never raises: a failing or missing platform is downgraded to fallback_write()
    and the recovered PlatformLogError is returned. None means delivered.
    """
    if platform is None:
        fallback_write(level, message)
        return PlatformLogError(f"no platform log for {source}")
    try:
        await platform.log(source, level, message)
    except Exception as e:
        fallback_write(level, message)
        logger.debug("platform log failed for %s", source, exc_info=e)
        return PlatformLogError(f"platform log failed for {source}: {e}")
    return None
