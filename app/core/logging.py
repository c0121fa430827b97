"""
➡️ But : Configurer un format de logs unique pour toute l'API.

Format : timestamp | niveau | module | message

À appeler une seule fois, au démarrage (create_app).
Les modules récupèrent leur logger via logging.getLogger(__name__).
"""

import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
    logging.getLogger(__name__).info("Logging initialized with level %s", level)
