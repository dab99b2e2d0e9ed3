"""
Centralised Loguru configuration for the analyzer.

``setup_logger()`` installs a coloured stderr sink for interactive runs
and, unless disabled, a DEBUG-level file sink under *log_dir* named
``stock_analyzer_<date>.log``.  The file sink rotates at 10 MB, keeps 30
days of history and zips rotated files.  Library modules never configure
sinks themselves; they just ``from loguru import logger``.
"""
import sys
from pathlib import Path

from loguru import logger

LOG_FILE_PREFIX = "stock_analyzer"

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan> | "
    "<level>{message}</level>"
)
FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | "
    "{name}:{function}:{line} - {message}"
)


def setup_logger(
    log_dir: str = "logs",
    console_level: str = "INFO",
    to_file: bool = True,
) -> logger:
    """Replace Loguru's default handler with the analyzer's sinks.

    Args:
        log_dir: Directory for the daily log file; created on demand.
        console_level: Minimum level printed to stderr.
        to_file: Set to ``False`` to skip the file sink (e.g. in
                 notebooks or read-only environments).

    Returns:
        The shared ``logger`` singleton.
    """
    logger.remove()
    logger.add(sys.stderr, level=console_level, format=CONSOLE_FORMAT, colorize=True)

    if to_file:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path / f"{LOG_FILE_PREFIX}_{{time:YYYY-MM-DD}}.log",
            level="DEBUG",
            format=FILE_FORMAT,
            rotation="10 MB",
            retention="30 days",
            compression="zip",
            enqueue=True,
            encoding="utf-8",
        )

    return logger
