import logging
import logging.config


def setup_logging(level: str = "INFO") -> None:
    """
    Configure le logging racine une seule fois (appelé par create_app).
    """
    level = (level or "INFO").upper()
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
                },
            },
            "root": {"level": level, "handlers": ["console"]},
            "loggers": {
                # httpx logge chaque requête vers l'API en INFO
                "httpx": {"level": "WARNING"},
            },
        }
    )
