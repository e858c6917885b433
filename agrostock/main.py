from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from agrostock import __version__
from agrostock.database import engine
from agrostock.exceptions import AgroStockError
from agrostock.logging_config import configure_logging
from agrostock.models import Base
from agrostock.routers import (
    auth, categories, suppliers, products,
    clients, inventory, invoices, reports,
)

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # 1. CREACIÓN AUTOMÁTICA DE TABLAS
    Base.metadata.create_all(bind=engine)
    logger.info("AgroStock %s listo", __version__)
    yield


app = FastAPI(
    title="AgroStock",
    description="Inventario y facturación para agropecuarias",
    version=__version__,
    lifespan=lifespan,
)

# 2. CONFIGURACIÓN DE CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 3. REGISTRO DE ROUTERS (BACKEND API)
app.include_router(auth.router, prefix="/api/auth", tags=["Autenticación"])
app.include_router(categories.router, prefix="/api/categories", tags=["Categorías"])
app.include_router(suppliers.router, prefix="/api/suppliers", tags=["Proveedores"])
app.include_router(products.router, prefix="/api/products", tags=["Productos"])
app.include_router(clients.router, prefix="/api/clients", tags=["Clientes"])
app.include_router(inventory.router, prefix="/api/inventory", tags=["Inventario & Kardex"])
app.include_router(invoices.router, prefix="/api/invoices", tags=["Facturación"])
app.include_router(reports.router, prefix="/api/reports", tags=["Reportes"])


@app.get("/health")
def health():
    return {"status": "ok"}


# 4. MANEJO DE ERRORES DEL NEGOCIO
@app.exception_handler(AgroStockError)
async def agrostock_error_handler(request: Request, exc: AgroStockError):
    if exc.status_code >= 500:
        logger.error("Error en %s: %s", request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.key},
    )
