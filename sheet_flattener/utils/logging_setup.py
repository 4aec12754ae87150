"""
Logging for Sheet Flattener.

The launcher and the Streamlit page both call setup_logging() once. Records
go to a coloured console stream at the configured level and to a per-run log
file that always receives DEBUG.
"""
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

CONSOLE_FORMAT = '[%(asctime)s] %(levelname)s | %(name)-12s | %(message)s'
FILE_FORMAT = '[%(asctime)s] %(levelname)-8s | %(name)-12s | %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
DEFAULT_LOG_DIR = Path('./logs')


class ColourFormatter(logging.Formatter):
    """Console formatter that wraps the level name in an ANSI colour."""

    COLOURS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def format(self, record):
        colour = self.COLOURS.get(record.levelname)
        if colour is None:
            return super().format(record)
        # Other handlers share the record, so colour a copy
        coloured = logging.makeLogRecord(record.__dict__)
        coloured.levelname = f"{colour}{record.levelname:<8}{self.RESET}"
        return super().format(coloured)


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(ColourFormatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT))
    return handler


def _file_handler(log_file: Path) -> logging.Handler:
    handler = logging.FileHandler(log_file, encoding='utf-8')
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
    return handler


def setup_logging(
    log_level: str = 'INFO',
    log_dir: Optional[Union[str, Path]] = None,
    component: str = 'sheet-flattener',
) -> logging.Logger:
    """
    Route every Sheet Flattener logger through the root logger.

    Replaces any handlers already on the root logger, so calling it again
    starts a new log file instead of duplicating output.

    Args:
        log_level: Console level name (DEBUG, INFO, WARNING, ERROR)
        log_dir: Where the log file goes (None = ./logs)
        component: Prefix of the log file name, e.g. 'sheet-flattener-ui'

    Returns:
        The root logger
    """
    console_level = getattr(logging, log_level.upper())

    log_path = DEFAULT_LOG_DIR if log_dir is None else Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)
    log_file = log_path / f"{component}_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"

    root = logging.getLogger()
    # Root passes everything; each handler filters to its own level
    root.setLevel(logging.DEBUG)
    root.handlers = [_console_handler(console_level), _file_handler(log_file)]

    root.info(f"Logging initialised (level: {log_level.upper()}, file: {log_file})")
    return root
