# agrostock/routers/__init__.py

# Esto expone los módulos para que "from agrostock.routers import products" funcione
from . import auth
from . import categories
from . import suppliers
from . import products
from . import clients
from . import inventory
from . import invoices
from . import reports
