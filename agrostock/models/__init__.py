# agrostock/models/__init__.py

# 1. Base de datos (Origen de la clase declarativa)
from agrostock.database import Base

# 2. Usuarios
from .users import User, Role

# 3. Catálogo
from .catalog import Category, Supplier, Product

# 4. Clientes
from .clients import Client

# 5. Inventario
from .inventory import Movement, MovementType

# 6. Facturación
from .invoices import Invoice, InvoiceLine, SaleType
