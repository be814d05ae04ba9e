"""Logging setup for the service and CLI."""

import logging.config


def configure_logging(level: str = "INFO") -> None:
    """Configure the `agrigov` logger hierarchy.

    `agrigov.audit.fallback` receives audit entries that could not be
    persisted and always logs at WARNING or above.
    """
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                    "stream": "ext://sys.stderr",
                },
            },
            "loggers": {
                "agrigov": {
                    "handlers": ["console"],
                    "level": level.upper(),
                    "propagate": False,
                },
                "agrigov.audit.fallback": {
                    "level": "WARNING",
                },
            },
        }
    )
