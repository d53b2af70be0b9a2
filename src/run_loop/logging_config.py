"""
Centralized logging configuration.

``setup_logging`` configures the root logger once with:
- Console output (DEBUG when ``DEBUG=1``, otherwise INFO)
- Optional file output, truncated on each start unless ``RUN_LOOP_LOG_APPEND`` is truthy
"""

import logging
import sys
import threading
from pathlib import Path
from typing import List, Optional, Union

from run_loop.config import env_bool
from run_loop.environment import debug_enabled

_config_lock = threading.Lock()
_INSTALLED_HANDLERS: List[logging.Handler] = []
_MODULE_LOGGER = logging.getLogger(__name__)
_TECHNICAL_FORMAT = "%(asctime)s.%(msecs)03d - %(name)s - %(levelname)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _remove_installed_handlers(root_logger: logging.Logger) -> None:
    """Detach and close handlers added by a previous setup_logging call."""
    while _INSTALLED_HANDLERS:
        handler = _INSTALLED_HANDLERS.pop()
        root_logger.removeHandler(handler)
        try:
            handler.close()
        except OSError as e:  # policy_guard: allow-silent-handler
            _MODULE_LOGGER.debug("Handler close failed: %s", e)


def _build_console_handler(level: int) -> logging.Handler:
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(_TECHNICAL_FORMAT, _DATE_FORMAT))
    console_handler.setLevel(level)
    return console_handler


def _build_file_handler(log_file: Union[str, Path]) -> logging.Handler:
    log_path = Path(log_file).expanduser()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    file_mode = "a" if env_bool("RUN_LOOP_LOG_APPEND", or_value=False) else "w"
    file_handler = logging.FileHandler(log_path, mode=file_mode)
    file_handler.setFormatter(logging.Formatter(_TECHNICAL_FORMAT, _DATE_FORMAT))
    file_handler.setLevel(logging.DEBUG)
    return file_handler


def setup_logging(level: Optional[int] = None, log_file: Union[str, Path, None] = None) -> logging.Logger:
    """Configure the root logger; calling again replaces the handlers it installed before."""

    with _config_lock:
        if level is None:
            level = logging.DEBUG if debug_enabled() else logging.INFO

        root_logger = logging.getLogger()
        _remove_installed_handlers(root_logger)
        root_logger.setLevel(logging.DEBUG)
        _INSTALLED_HANDLERS.append(_build_console_handler(level))
        if log_file is not None:
            _INSTALLED_HANDLERS.append(_build_file_handler(log_file))
        for handler in _INSTALLED_HANDLERS:
            root_logger.addHandler(handler)

        logging.getLogger("psutil").setLevel(logging.WARNING)
        return root_logger


__all__ = ["setup_logging"]
