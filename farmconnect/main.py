# farmconnect/main.py
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from farmconnect.api.errors import register_error_handlers
from farmconnect.api.routers import health, users, products, orders
from farmconnect.data.database import Base, engine
from farmconnect.utils.logging import get_logger

# register every model in Base.metadata before create_all
import farmconnect.data.models  # noqa: F401

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Creating tables: {sorted(Base.metadata.tables.keys())}")
    try:
        Base.metadata.create_all(bind=engine)
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise
    yield
    engine.dispose()


def create_app() -> FastAPI:
    app = FastAPI(
        title="FarmConnect Marketplace",
        version="1.0.0",
        lifespan=lifespan,
    )

    register_error_handlers(app)

    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(products.router)
    app.include_router(orders.router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
