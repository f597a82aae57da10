import logging
import logging.handlers
import os
from datetime import datetime

LOGGER_NAME = "JewelryApi"
LOG_FORMAT = "%(asctime)s %(levelname)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class DynamicDailyFileHandler(logging.handlers.WatchedFileHandler):
    """
    Writes to BASE/YYYY/MM/log-YYYY-MM-DD.log and switches to a new file
    on the first record of a new day.
    """
    def __init__(self, base_log_dir, encoding="utf-8"):
        self.base_log_dir = base_log_dir
        self.current_date = self._today()
        super().__init__(self._path_for(self.current_date), encoding=encoding)

    @staticmethod
    def _today():
        return datetime.now().strftime("%Y-%m-%d")

    def _path_for(self, day):
        year, month, _ = day.split("-")
        folder = os.path.join(self.base_log_dir, year, month)
        os.makedirs(folder, exist_ok=True)
        return os.path.join(folder, f"log-{day}.log")

    def emit(self, record):
        try:
            today = self._today()
            if today != self.current_date:
                if self.stream and not self.stream.closed:
                    self.stream.close()
                self.current_date = today
                self.baseFilename = self._path_for(today)
                self.stream = self._open()
            super().emit(record)
        except Exception:
            self.handleError(record)


def get_base_log_dir():
    """APP_LOG_DIR, or storage/logs next to the project."""
    return os.environ.get("APP_LOG_DIR") or os.path.abspath(
        os.path.join(os.path.dirname(__file__), "../../storage/logs")
    )


def get_log_level():
    """APP_LOG_LEVEL by name (DEBUG, INFO, ...). Unknown names fall back to DEBUG."""
    level = logging.getLevelName(os.environ.get("APP_LOG_LEVEL", "DEBUG").upper())
    return level if isinstance(level, int) else logging.DEBUG


def setup_logger(name=LOGGER_NAME, base_log_dir=None, level=None):
    """Attach the console and daily-file handlers once; later calls only reset the level."""
    logger = logging.getLogger(name)
    logger.setLevel(level if level is not None else get_log_level())

    if not logger.handlers:
        formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
        for handler in (
            logging.StreamHandler(),
            DynamicDailyFileHandler(base_log_dir or get_base_log_dir()),
        ):
            handler.setFormatter(formatter)
            logger.addHandler(handler)

    return logger


Log = setup_logger()

__all__ = ["Log", "setup_logger"]
