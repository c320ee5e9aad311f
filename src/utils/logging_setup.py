"""
Logging configuration shared by the command-line front ends
"""

import logging
import sys


def setup_logging(level=logging.INFO, log_file=None):
    """
    Configure the root logger

    Args:
        level: Level for this project's loggers
        log_file: Optional path of a log file written alongside stdout
    """
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))

    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s:%(lineno)d | %(message)s",
        datefmt="%H:%M:%S",
        handlers=handlers,
        force=True,
    )

    # Verbose output only for our own packages
    logging.getLogger("src").setLevel(level)
    logging.getLogger("matplotlib").setLevel(logging.WARNING)
    logging.getLogger("PIL").setLevel(logging.WARNING)
