"""
Logging setup shared by all ExactMS modules.

The console gets colored level names at the level chosen with --log_level;
every record also goes to a timestamped file in <work_dir>/logs.
"""

import logging
import os
from datetime import datetime

RESET = "\033[0m"
SECTION_COLOR = "\033[35m"
LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[41m",
}

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CONSOLE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

# third party loggers that only matter when something goes wrong
QUIET_LOGGERS = ["numba", "joblib"]


class ColorFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        # the record is shared with the file handler, color a copy
        colored = logging.makeLogRecord(record.__dict__)
        color = LEVEL_COLORS.get(record.levelno, RESET)
        colored.levelname = f"{color}{record.levelname}{RESET}"
        return super().format(colored)


def setup_logging(work_dir: str, console_level: str) -> str:
    """
    :param work_dir: str, the run's working directory.
    :param console_level: str, level name for the console handler.
    :return: str, path of the log file.
    """
    log_dir = os.path.join(work_dir, "logs")
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(
        log_dir, f"{datetime.now().strftime('%Y-%m-%d_%H-%M-%S')}.log"
    )

    file_handler = logging.FileHandler(filename=log_file, mode="w")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT))

    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_level)
    console_handler.setFormatter(ColorFormatter(CONSOLE_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return log_file


def get_logger(module_name: str) -> logging.Logger:
    return logging.getLogger(module_name)


def log_section_title(
    logger: logging.Logger, title: str, symbol: str = "=", width: int = 80
):
    fill = symbol * max((width - len(title) - 2) // 2, 0)
    logger.info(f"{SECTION_COLOR}{fill} {title} {fill}{RESET}")


def log_parameter(logger: logging.Logger, parameter_name, parameter_value):
    logger.info(f"  {parameter_name}: {parameter_value}")


def format_execution_time(seconds: float) -> str:
    """
    Format a duration as e.g. '1h 2m 3s 45ms', leaving out zero parts.
    """
    total_millis = int(round(seconds * 1000))
    hours, rest = divmod(total_millis, 3_600_000)
    minutes, rest = divmod(rest, 60_000)
    secs, millis = divmod(rest, 1000)

    parts = [
        f"{value}{unit}"
        for value, unit in ((hours, "h"), (minutes, "m"), (secs, "s"), (millis, "ms"))
        if value
    ]
    return " ".join(parts) if parts else "0ms"
