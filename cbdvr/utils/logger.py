import json
import logging
import sys
from datetime import datetime

LOGGER_NAME = "cbdvr"

# level names independent of the logging module registry
LEVEL_NAMES = {
    logging.DEBUG: "DEBUG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERROR",
}
LEVELS = {name: level for level, name in LEVEL_NAMES.items()}
LEVELS["WARNING"] = logging.WARNING


class Logger:
    """
    Structured logger on top of the standard logging module.

    Every call takes a message and an optional attribute dict.
    In prod mode one JSON object is emitted per line, otherwise a readable text line.
    """

    def __init__(self, name: str = LOGGER_NAME, is_prod: bool = False):
        self.is_prod = is_prod
        self.__logger = logging.getLogger(name)
        if not self.__logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(logging.Formatter("%(message)s"))
            self.__logger.addHandler(handler)
        self.__logger.setLevel(logging.INFO)
        self.__logger.propagate = False

    def set_level(self, level: int | str):
        if isinstance(level, str):
            if level.upper() not in LEVELS:
                raise ValueError(f"Unknown log level: {level}")
            level = LEVELS[level.upper()]
        self.__logger.setLevel(level)

    def debug(self, msg: str, attrs: dict | None = None):
        self.__log(logging.DEBUG, msg, attrs)

    def info(self, msg: str, attrs: dict | None = None):
        self.__log(logging.INFO, msg, attrs)

    def warn(self, msg: str, attrs: dict | None = None):
        self.__log(logging.WARNING, msg, attrs)

    def error(self, msg: str, attrs: dict | None = None):
        self.__log(logging.ERROR, msg, attrs)

    def __log(self, level: int, msg: str, attrs: dict | None):
        if not self.__logger.isEnabledFor(level):
            return
        self.__logger.log(level, self.__format(level, msg, attrs))

    def __format(self, level: int, msg: str, attrs: dict | None) -> str:
        now = datetime.now().isoformat(timespec="milliseconds")
        level_name = LEVEL_NAMES[level]
        if self.is_prod:
            record = {"time": now, "level": level_name, "message": msg}
            if attrs is not None:
                for k, v in attrs.items():
                    record[k] = v
            return json.dumps(record, ensure_ascii=False, default=str)

        line = f"{now} {level_name:<7} {msg}"
        if attrs is None:
            return line
        stack = attrs.get("stacktrace")
        fields = " ".join(f"{k}={v}" for k, v in attrs.items() if k != "stacktrace")
        if len(fields) > 0:
            line = f"{line} | {fields}"
        if stack is not None:
            line = f"{line}\n{stack}"
        return line


log = Logger()
