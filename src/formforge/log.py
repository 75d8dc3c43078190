import logging.config

from .consts import LOG_FILE_DEFAULT
from .utils import canonicalify, ensure_path

LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": "%(asctime)s [%(levelname)s] [%(name)s] [%(threadName)s] - %(message)s"
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": logging.INFO,
            "formatter": "default",
            "stream": "ext://sys.stdout",
        },
        "file": {
            "class": "logging.handlers.RotatingFileHandler",
            "level": logging.DEBUG,
            "formatter": "default",
            "filename": LOG_FILE_DEFAULT,
            "maxBytes": 5 * 1024 * 1024,  # 5MB
            "backupCount": 10,
        },
    },
    "loggers": {
        "formforge": {
            "handlers": ["console", "file"],
            "level": logging.DEBUG,
            "propagate": True,
        }
    },
}


def setup(logfile=None):
    if not logfile:
        logfile = LOGGING_CONFIG["handlers"]["file"]["filename"]

    p = canonicalify(logfile)
    if len(p.parts) > 1:
        ensure_path(p.parent)

    config = dict(LOGGING_CONFIG)
    config["handlers"] = {
        **LOGGING_CONFIG["handlers"],
        "file": {**LOGGING_CONFIG["handlers"]["file"], "filename": str(p)},
    }
    logging.config.dictConfig(config)
