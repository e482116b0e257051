# stationflow/util/log.py
from __future__ import annotations

import logging

from colorama import Fore, Style, just_fix_windows_console


LEVEL_COLORS = {
    logging.DEBUG: Fore.BLUE,
    logging.INFO: Fore.CYAN,
    logging.WARNING: Fore.YELLOW,
    logging.ERROR: Fore.RED,
    logging.CRITICAL: Fore.MAGENTA,
}


class ColorFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        msg = super().format(record)
        color = LEVEL_COLORS.get(record.levelno, "")
        return f"{color}{msg}{Style.RESET_ALL}"


def setup_logging(level: str | int = "INFO") -> None:
    """
    Attach one colored stream handler to the stationflow logger.
    Safe to call more than once.
    """
    just_fix_windows_console()

    logger = logging.getLogger("stationflow")
    logger.setLevel(level)

    for h in logger.handlers:
        if isinstance(h.formatter, ColorFormatter):
            return

    handler = logging.StreamHandler()
    handler.setFormatter(ColorFormatter("%(asctime)s %(levelname)s %(name)s: %(message)s", "%H:%M:%S"))
    logger.addHandler(handler)
