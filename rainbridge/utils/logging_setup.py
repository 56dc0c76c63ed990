"""
Logging configuration for Rainbridge.

This module sets up logging for the command-line entry point. Library code
only ever calls ``logging.getLogger``.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

from rainbridge.utils.secure_logging import TokenRedactingFilter

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    console_output: bool = True,
    tokens: Iterable[Optional[str]] = (),
) -> Optional[Path]:
    """
    Set up logging configuration.

    Args:
        log_level: Root log level name
        log_file: Optional log file name; a timestamped copy is written
            under ``logs/`` next to the working directory
        console_output: Whether to log to stdout
        tokens: Secrets to redact from every record

    Returns:
        Path of the log file, if one was created
    """
    redactor = TokenRedactingFilter(tokens)
    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

    handlers = []
    log_path = None

    if log_file:
        if getattr(sys, "frozen", False):
            app_dir = Path(sys.executable).parent
        else:
            app_dir = Path.cwd()

        log_dir = app_dir / "logs"
        log_dir.mkdir(exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_path = log_dir / f"{Path(log_file).stem}_{timestamp}.log"

        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        handlers.append(file_handler)

    if console_output:
        handlers.append(logging.StreamHandler(sys.stdout))

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(redactor)

    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        handlers=handlers,
        force=True,
    )

    logger = logging.getLogger(__name__)
    if log_path:
        logger.info(f"Rainbridge starting - Log file: {log_path}")
    logger.debug(f"Log level: {log_level}")

    # Reduce noise from some libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests").setLevel(logging.WARNING)

    return log_path
