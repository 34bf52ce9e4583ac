"""File logging setup for the MOCO client."""
import logging
from datetime import date
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Union

LOGGER_NAMES = ("app", "moco_client", "preferences", "business_logic", "ui")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def setup_logging(log_dir: Path, level: Union[int, str] = logging.INFO) -> Path:
    """
    Send application logs to a dated file.

    The terminal belongs to the TUI, so nothing is logged to stderr. Calling
    this again replaces the handlers installed by a previous call.

    Args:
        log_dir: Directory for log files, created if missing
        level: Logging level name or number for the file handler

    Returns:
        Path of the log file, e.g. ``<log_dir>/api_2024-01-03.log``
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    log_dir = Path(log_dir).expanduser()
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / f"api_{date.today().isoformat()}.log"

    handler = RotatingFileHandler(log_path, maxBytes=2_000_000, backupCount=2, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        for old in list(logger.handlers):
            logger.removeHandler(old)
            old.close()
        logger.setLevel(level)
        logger.addHandler(handler)
        logger.propagate = False

    return log_path
