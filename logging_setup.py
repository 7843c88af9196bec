import logging
import json
from logging.handlers import TimedRotatingFileHandler
import os
from datetime import datetime, timezone

from config import Config


class JsonFormatter(logging.Formatter):
    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry)


def setup_logger(log_dir: str = Config.LOG_DIR, level: str = Config.LOG_LEVEL, to_file: bool = True):
    logger = logging.getLogger("clinic_api")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Already configured (create_app can run more than once per process)
    if logger.handlers:
        return logger

    if to_file:
        os.makedirs(log_dir, exist_ok=True)
        # Log file rotates daily, keeps 14 days
        handler = TimedRotatingFileHandler(
            filename=os.path.join(log_dir, "clinic_api.log"),
            when="midnight",
            backupCount=14,
            encoding="utf-8"
        )
        handler.setFormatter(JsonFormatter())
        logger.addHandler(handler)

    # Also log to console for debugging
    console = logging.StreamHandler()
    console.setFormatter(JsonFormatter())
    logger.addHandler(console)

    return logger
