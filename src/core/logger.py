import json
import logging
import logging.config
import sys

from core.config import configs


class JsonFormatter(logging.Formatter):
    """
    Formatter for logging in JSON format.
    """

    def format(self, record):
        log_record = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(log_record)


# Libraries that are chatty at DEBUG level while decoding images or fetching URLs.
NOISY_LOGGERS = ("PIL", "httpx", "httpcore", "multipart")


def _build_logging_config(formatter_name: str, formatter: dict, app_level: str) -> dict:
    handler_name = f"console_{formatter_name}"
    loggers = {
        # Root Logger: Catches everything not caught by specific loggers
        "root": {
            "level": configs.LOG_LEVEL,
            "handlers": [handler_name],
        },
        # Application Loggers (derivation engine, API, settings)
        "app": {
            "level": app_level,
            "handlers": [handler_name],
            "propagate": False,
        },
        "api": {
            "level": app_level,
            "handlers": [handler_name],
            "propagate": False,
        },
        # Uvicorn (FastAPI Server) Loggers
        "uvicorn": {
            "level": "INFO",
            "handlers": [handler_name],
            "propagate": False,
        },
        "uvicorn.access": {
            "level": "INFO",
            "handlers": [handler_name],
            "propagate": False,
        },
        "uvicorn.error": {
            "level": "INFO",
            "handlers": [handler_name],
            "propagate": False,
        },
    }
    for name in NOISY_LOGGERS:
        loggers[name] = {
            "level": "WARNING",
            "handlers": [handler_name],
            "propagate": False,
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {formatter_name: formatter},
        "handlers": {
            handler_name: {
                "class": "logging.StreamHandler",
                "stream": sys.stdout,
                "formatter": formatter_name,
            },
        },
        "loggers": loggers,
    }


# -----------------------------------------------------------------------------
# Development Logging Configuration
# -----------------------------------------------------------------------------
# Console-friendly, readable text format.
DEV_LOGGING_CONFIG = _build_logging_config(
    "default",
    {
        "format": "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
        "datefmt": "%Y-%m-%d %H:%M:%S",
    },
    app_level="DEBUG" if configs.DEBUG else "INFO",
)

# -----------------------------------------------------------------------------
# Production Logging Configuration
# -----------------------------------------------------------------------------
# JSON structured, machine-parsable, suitable for aggregation (ELK, CloudWatch, etc.)
PROD_LOGGING_CONFIG = _build_logging_config(
    "json",
    {
        "()": JsonFormatter,
        "datefmt": "%Y-%m-%dT%H:%M:%S%z",
    },
    app_level=configs.LOG_LEVEL,
)


def setup_logging():
    """
    Set up logging configuration based on the environment.
    """
    env = configs.ENVIRONMENT.lower()

    if env == "production":
        log_config = PROD_LOGGING_CONFIG
    else:
        log_config = DEV_LOGGING_CONFIG

    logging.config.dictConfig(log_config)

    logger = logging.getLogger("app")
    logger.info(f"Logging setup complete for {env} environment with level {configs.LOG_LEVEL}")
