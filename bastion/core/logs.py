import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from config.settings import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE_NAME = "bastion.log"


def setup_logging(level: str | None = None, log_dir: str | None = None) -> None:
    """Log to stdout and, when a log directory is configured, to size-rotated files."""
    level_name = (level or settings.log_level).upper()
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    directory = log_dir if log_dir is not None else settings.log_dir
    if directory:
        Path(directory).mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                Path(directory) / LOG_FILE_NAME,
                maxBytes=settings.log_max_bytes,
                backupCount=settings.log_backup_count,
                encoding="utf-8",
            )
        )

    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )

    # hikari logs every gateway payload at DEBUG
    if level_name != "DEBUG":
        logging.getLogger("hikari").setLevel(logging.INFO)
