"""Configuración leída de variables de entorno, con valores locales por defecto."""

from __future__ import annotations

import os
from decimal import Decimal


def _get_env(name: str, default: str | None = None) -> str | None:
    """Devuelve la variable de entorno si no está vacía."""
    value = os.getenv(name)
    if value is None:
        return default
    value = value.strip()
    return value if value else default


# Base de datos (PostgreSQL en producción, SQLite en local)
DATABASE_URL = _get_env("DATABASE_URL", "sqlite:///./agrostock.db")

# Configuración JWT
SECRET_KEY = _get_env("SECRET_KEY", "agrostock_secret_key_change_me_in_prod")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(_get_env("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 12)))

# Facturación
DEFAULT_TAX_RATE = Decimal(_get_env("DEFAULT_TAX_RATE", "15.00"))
INVOICE_PREFIX = _get_env("INVOICE_PREFIX", "FAC")

LOG_LEVEL = _get_env("LOG_LEVEL", "INFO")
