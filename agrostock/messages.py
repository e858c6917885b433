"""
Resolución de mensajes: clave -> texto para el usuario final.

Los errores del dominio sólo conocen la clave; la capa que los muestra
decide el texto. Por ahora sólo existe el catálogo en español.
"""

import logging

logger = logging.getLogger(__name__)

MESSAGES = {
    # --- Movimientos de inventario ---
    "movement_product_required": "Debe seleccionar un producto para el movimiento",
    "movement_quantity_positive": "La cantidad del movimiento debe ser mayor que cero",
    "insufficient_stock": "No hay stock suficiente del producto {product} para realizar la salida. Disponible: {available}",
    "unsupported_movement_type": "Tipo de movimiento no soportado: {movement_type}",
    "movement_immutable": "Los movimientos de inventario no se pueden modificar ni eliminar",

    # --- Líneas de factura ---
    "line_product_required": "Debe seleccionar un producto para la línea",
    "line_quantity_positive": "La cantidad debe ser mayor que cero",
    "line_unit_price_positive": "El precio unitario debe ser mayor que cero",
    "line_below_purchase_price": "No se puede vender el producto {product} por debajo del precio de compra",

    # --- Facturas ---
    "invoice_without_lines": "La factura debe tener al menos un producto",
    "invoice_without_client": "Debe seleccionar un cliente para la factura",
    "invoice_total_positive": "El total de la factura debe ser mayor que cero",
    "client_without_credit": "El cliente {client} no tiene crédito habilitado",
    "credit_limit_exceeded": "La factura supera el límite de crédito del cliente. Límite: {limit}, saldo actual: {balance}",
    "invoice_paid_locked": "La factura {number} ya fue pagada y no se puede modificar",
    "invoice_number_duplicated": "Ya existe una factura con el número {number}",

    # --- Pagos ---
    "no_client": "La factura no tiene cliente asignado",
    "not_credit_sale": "Solo se pueden registrar pagos de facturas de crédito",
    "already_paid": "La factura ya está pagada",
    "non_positive_total": "El total de la factura debe ser mayor que cero para registrar el pago",

    # --- Clientes ---
    "client_contact_required": "El cliente debe tener al menos un teléfono o un correo electrónico",
    "client_credit_limit_positive": "Si el cliente tiene crédito, el límite de crédito debe ser mayor que cero",
    "client_balance_over_limit": "El saldo pendiente no puede superar el límite de crédito del cliente",
    "client_has_debt": "No se puede desactivar. El cliente tiene una deuda pendiente de {balance}",
    "client_code_duplicated": "Ya existe un cliente con el código {code}",

    # --- Proveedores ---
    "supplier_contact_required": "El proveedor debe tener al menos un teléfono, celular o correo electrónico",
    "supplier_credit_days_positive": "Si el proveedor maneja crédito, el plazo de crédito en días debe ser mayor que cero",
    "supplier_credit_limit_positive": "Si el proveedor maneja crédito, el límite de crédito debe ser mayor que cero",
    "supplier_balance_over_limit": "El saldo pendiente con el proveedor no puede superar su límite de crédito",
    "supplier_code_duplicated": "Ya existe un proveedor con el código {code}",

    # --- Categorías ---
    "category_name_required": "El nombre de la categoría es obligatorio",
    "category_name_too_short": "El nombre de la categoría debe tener al menos 3 caracteres",
    "category_name_too_long": "El nombre de la categoría no puede superar los 60 caracteres",
    "category_name_duplicated": "Ya existe la categoría {name}",

    # --- Productos ---
    "product_sale_below_purchase": "El precio de venta no puede ser menor que el precio de compra para el producto {code}",
    "product_code_duplicated": "Ya existe un producto con el código {code}",

    # --- Búsquedas ---
    "not_found": "{entity} no encontrado: {key}",
}


def get_message(key, /, **params):
    """Devuelve el texto de la clave, o la propia clave si no existe."""
    template = MESSAGES.get(key)
    if template is None:
        logger.warning("Clave de mensaje sin traducción: %s", key)
        return key
    try:
        return template.format(**params)
    except KeyError:
        logger.warning("Parámetros incompletos para el mensaje %s: %s", key, params)
        return template
