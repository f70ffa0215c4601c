import json
import logging
import logging.config
from datetime import UTC, datetime


class JsonFormatter(logging.Formatter):
    """One JSON object per line: level, logger, message, timestamp"""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def configure_logging(ApplicationConfig) -> None:
    """
    Configure root logging from application config.

    Logs go to stdout and, when LOG_FILE is set, to that file as well.
    """
    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "json",
            "stream": "ext://sys.stdout",
        }
    }
    if ApplicationConfig.LOG_FILE:
        handlers["file"] = {
            "class": "logging.FileHandler",
            "formatter": "json",
            "filename": ApplicationConfig.LOG_FILE,
        }

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"json": {"()": JsonFormatter}},
            "handlers": handlers,
            "root": {
                "level": ApplicationConfig.LOG_LEVEL.upper(),
                "handlers": list(handlers),
            },
        }
    )
