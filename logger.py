"""Ledger logging.

Command output and ledger mutations go through one "tally" logger, which
writes to the console and to a log file named after the current day.
"""

import logging
from datetime import date
from config import Config

LOGGER_NAME = "tally"


def setup_logging(config: Config) -> logging.Logger:
    """Attach the console and dated file handlers to the tally logger.

    Safe to call again; earlier handlers are replaced.

    Args:
        config: Settings providing log_dir and log_level.

    Returns:
        The tally logger.
    """
    config.log_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(config.log_level)

    logger.handlers.clear()

    detailed_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_formatter = logging.Formatter("%(message)s")

    log_file_path = config.log_dir / f"tally-{date.today().isoformat()}.log"
    file_handler = logging.FileHandler(log_file_path, encoding="utf-8")
    file_handler.setLevel(config.log_level)
    file_handler.setFormatter(detailed_formatter)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(config.log_level)
    console_handler.setFormatter(console_formatter)

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    return logger


def get_logger() -> logging.Logger:
    """Logger shared by the services and CLI modules."""
    return logging.getLogger(LOGGER_NAME)
