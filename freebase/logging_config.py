"""Root logger setup for a plugin running outside a host-managed logging stack."""

import logging
import logging.handlers
from pathlib import Path

from freebase.settings import LoggingSettings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    plugin_dir: Path, cfg: LoggingSettings, environment: str = "dev"
) -> Path:
    """Replace root handlers with a rotating file under plugin_dir (plus console when enabled).

    Console output follows cfg.log_to_console, or the environment when that is unset.
    Returns the log file path.
    """
    level = logging.getLevelName(cfg.level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    log_path = plugin_dir / cfg.file
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handlers: list[logging.Handler] = [
        logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=cfg.max_bytes,
            backupCount=cfg.backup_count,
            encoding="utf-8",
        )
    ]
    console = cfg.log_to_console if cfg.log_to_console is not None else environment == "dev"
    if console:
        handlers.append(logging.StreamHandler())

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    root = logging.getLogger()
    root.setLevel(level)
    for h in root.handlers[:]:
        root.removeHandler(h)
    for h in handlers:
        h.setLevel(level)
        h.setFormatter(formatter)
        root.addHandler(h)
    return log_path
