"""
Errores del dominio.

Cada error lleva una clave de mensaje (resuelta en `agrostock.messages`),
los parámetros para formatearla y el código HTTP con el que se expone.
Ninguno se reintenta: la operación que lo lanza se aborta completa.
"""

from agrostock.messages import get_message


class AgroStockError(Exception):
    """Base de todos los errores de negocio."""

    status_code = 400

    def __init__(self, key: str, /, **params):
        self.key = key
        self.params = params
        self.message = get_message(key, **params)
        super().__init__(self.message)


class ValidationError(AgroStockError):
    """Entrada mal formada o faltante."""


class InsufficientStockError(AgroStockError):
    status_code = 409

    def __init__(self, product: str, available):
        super().__init__("insufficient_stock", product=product, available=available)


class CreditLimitExceededError(AgroStockError):
    status_code = 409

    def __init__(self, limit, balance):
        super().__init__("credit_limit_exceeded", limit=limit, balance=balance)


class PaymentError(AgroStockError):
    """Pago rechazado; `reason` es una de las constantes de la clase."""

    status_code = 409

    NO_CLIENT = "no_client"
    NOT_CREDIT_SALE = "not_credit_sale"
    ALREADY_PAID = "already_paid"
    NON_POSITIVE_TOTAL = "non_positive_total"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class UnsupportedOperationError(AgroStockError):
    pass


class NotFoundError(AgroStockError):
    status_code = 404

    def __init__(self, entity: str, key):
        super().__init__("not_found", entity=entity, key=key)


class ImmutableRecordError(AgroStockError):
    status_code = 409
