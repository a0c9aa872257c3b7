"""
Logging helpers shared by the API and the client.
"""
import logging
from pathlib import Path

from mlworkflow.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_configured = False


def configure_logging(level: str | None = None, log_file: str | None = None) -> None:
    """
    Install handlers on the package logger once.

    Args:
        level: Log level name, defaults to ``settings.LOG_LEVEL``
        log_file: Optional file to append to, defaults to ``settings.LOG_FILE``
    """
    global _configured
    if _configured:
        return

    root = logging.getLogger("mlworkflow")
    root.setLevel(level or settings.LOG_LEVEL)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    stream = logging.StreamHandler()
    stream.setFormatter(formatter)
    root.addHandler(stream)

    log_file = log_file if log_file is not None else settings.LOG_FILE
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_file, mode="a")
        fh.setFormatter(formatter)
        root.addHandler(fh)

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``mlworkflow`` hierarchy."""
    configure_logging()
    return logging.getLogger(name)
