# gearshare/main.py
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from gearshare.api.routers import carts, health, orders, products, users
from gearshare.data.database import Base, engine
from gearshare.data.seed import seed_admin
from gearshare.domain.errors import ServiceError
from gearshare.utils.logging import get_logger
from gearshare.utils.retry import db_retry
from gearshare.utils.settings import ENVIRONMENT

# import every model before create_all
import gearshare.data.models  # noqa: F401

logger = get_logger(__name__)


@db_retry()
def create_tables() -> None:
    logger.info(f"Creating tables: {list(Base.metadata.tables.keys())}")
    Base.metadata.create_all(bind=engine)


@asynccontextmanager
async def lifespan(app: FastAPI):
    create_tables()
    seed_admin()
    logger.info(f"GearShare API started ({ENVIRONMENT})")
    yield
    engine.dispose()
    logger.info("GearShare API stopped")


async def service_error_handler(request: Request, exc: ServiceError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected ({exc.kind}): {exc}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc), "error": exc.kind},
    )


def create_app() -> FastAPI:
    app = FastAPI(
        title="GearShare Rental API",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PATCH", "PUT", "DELETE"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ServiceError, service_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(products.router)
    app.include_router(products.favorites_router)
    app.include_router(carts.router)
    app.include_router(orders.router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
