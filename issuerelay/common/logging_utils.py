"""Logging utilities for consistent logging across modules."""

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _log_dir(log_dir: Optional[str] = None) -> Path:
    return Path(log_dir or os.getenv("ISSUERELAY_LOG_DIR", "logs"))


def setup_logging(log_dir: Optional[str] = None) -> None:
    """Setup logging configuration."""
    log_path = _log_dir(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        level=logging.INFO,
        format=LOG_FORMAT,
        handlers=[
            logging.FileHandler(log_path / "issuerelay.log"),
            logging.StreamHandler()
        ]
    )


def log_server_message(message: str) -> None:
    """Log server-related messages."""
    logger.info(f"[SERVER] {message}")


def log_error(error_message: str, error_data: str = "", log_dir: Optional[str] = None) -> None:
    """Log error messages with optional error data.

    The message always goes to the regular log. When a log directory is
    writable, a timestamped ``error-*.log`` file also captures the request
    data that triggered it.
    """
    logger.error(error_message)
    try:
        log_path = _log_dir(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%dT%H%M%S%f")
        error_file = log_path / f"error-{timestamp}.log"

        with open(error_file, "w", encoding="utf-8") as f:
            f.write(f"Error occurred at: {datetime.now().isoformat()}\n")
            f.write(f"Error message: {error_message}\n")
            if error_data:
                f.write(f"Error data:\n{error_data}\n")

        logger.error(f"Error logged to: {error_file}")

    except OSError as e:
        logger.error(f"Failed to log error: {e}")
