"""Configuración del logging de la aplicación."""

import logging

from agrostock.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

_configured = False


def configure_logging(level: str | None = None) -> None:
    """Configura el logger raíz una sola vez por proceso."""
    global _configured
    if _configured:
        return

    logging.basicConfig(level=(level or LOG_LEVEL).upper(), format=LOG_FORMAT)
    # SQLAlchemy es muy verboso en INFO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    _configured = True
