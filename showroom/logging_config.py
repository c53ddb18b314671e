# showroom/logging_config.py

"""Logging setup for the showroom service and CLI.

All modules log through children of the ``showroom`` logger. The console
handler is always installed; when ``LOG_DIR`` is configured each launch also
gets its own timestamped file (e.g. ``logs/run_20261019_153045.log``).
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from showroom.config import Config

_DETAILED_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | %(module)s:%(funcName)s:%(lineno)d | "
    "%(message)s"
)

_CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(config: Optional[Config] = None) -> Optional[Path]:
    """Initialise the ``showroom`` logger.

    Returns:
        The path of the per-run log file, or ``None`` when logging only to the
        console.
    """
    config = config or Config()

    root_logger = logging.getLogger("showroom")
    root_logger.setLevel(logging.DEBUG)

    # Repeated calls (tests, reloads) keep the first set of handlers
    if root_logger.handlers:
        return _existing_log_file(root_logger)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(getattr(logging, config.LOG_LEVEL, logging.INFO))
    console_handler.setFormatter(
        logging.Formatter(_CONSOLE_FORMAT, datefmt=_DATE_FORMAT)
    )
    root_logger.addHandler(console_handler)

    log_file: Optional[Path] = None
    if config.LOG_DIR is not None:
        config.LOG_DIR.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = config.LOG_DIR / f"run_{timestamp}.log"

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(_DETAILED_FORMAT, datefmt=_DATE_FORMAT)
        )
        root_logger.addHandler(file_handler)

    root_logger.info("Logging initialised (file: %s)", log_file or "none")
    return log_file


def _existing_log_file(logger: logging.Logger) -> Optional[Path]:
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler):
            return Path(handler.baseFilename)
    return None
