"""
Logging setup for a wiki-author-edits run.

Called once by the command line entry point; components receive the
returned logger (or a child of it) rather than configuring logging.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Union

from tqdm import tqdm

APP_LOGGER_NAME = "wiki_author_edits"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# per-request chatter of URL sources, only wanted with --debug
NOISY_LOGGERS = ("urllib3", "requests")


class TqdmConsoleHandler(logging.StreamHandler):
    """Console handler that prints above the per-source progress bar."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            tqdm.write(self.format(record), file=self.stream)
        except Exception:
            self.handleError(record)


def setup_logger(
    log_dir: Union[str, Path],
    debug: bool = False,
    log_file: str = f"{APP_LOGGER_NAME}.log",
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5
) -> logging.Logger:
    """
    Configure the application logger with a rotating file and the console.

    Re-running replaces the handlers of a previous call, so repeated runs in
    one process do not duplicate output.

    Args:
        log_dir: Directory for the log file, created when missing
        debug: DEBUG level everywhere, including request logging
        log_file: Name of the log file inside log_dir

    Returns:
        The configured application logger
    """
    logger = logging.getLogger(APP_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    log_dir = Path(log_dir).expanduser()
    log_dir.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    file_handler = RotatingFileHandler(
        filename=log_dir / log_file,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding='utf-8'
    )
    console_handler = TqdmConsoleHandler()
    for handler in (file_handler, console_handler):
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if debug else logging.WARNING)

    return logger
