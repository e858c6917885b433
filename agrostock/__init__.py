# agrostock: inventario y facturación para una agropecuaria
__version__ = "1.0.0"
