from __future__ import annotations

import logging
import threading
from typing import Literal, Optional

from pydantic_settings import BaseSettings

_lock = threading.Lock()
_instance: GridConfig | None = None


class GridConfig(BaseSettings):
    model_config = {"env_prefix": "CELLGRID_"}

    rows: int = 20
    cols: int = 10
    storage_key: str = "spreadsheet"
    storage_dir: str = ".cellgrid"
    history_limit: Optional[int] = None
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"


def get_config() -> GridConfig:
    global _instance
    if _instance is None:
        with _lock:
            if _instance is None:
                _instance = GridConfig()
    return _instance


def reset_config() -> None:
    global _instance
    with _lock:
        _instance = None


def configure_logging(level: str | None = None) -> None:
    """Attach a console handler to the ``cellgrid`` logger.

    The library itself never installs handlers; scripts and demos call this
    once at startup. ``level`` defaults to ``GridConfig.log_level``.
    """
    logger = logging.getLogger("cellgrid")
    logger.setLevel(level or get_config().log_level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        logger.addHandler(handler)
