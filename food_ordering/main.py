"""Main FastAPI application."""
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from food_ordering.api import auth, cart, health, menu
from food_ordering.core.config import settings
from food_ordering.core.dependencies import init_catalog
from food_ordering.core.exceptions import OrderingError
from food_ordering.core.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    setup_logging()
    await init_catalog()
    logger.info(f"Starting {settings.app_name}")
    yield


app = FastAPI(
    title=settings.app_name,
    description="Cart, pricing and checkout service for food ordering",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(OrderingError)
async def ordering_error_handler(request: Request, exc: OrderingError) -> JSONResponse:
    """Turn ordering errors into JSON responses."""
    logger.warning(
        f"[API] {request.method} {request.url.path} failed - {exc.code}: {exc.message}"
    )
    return JSONResponse(status_code=exc.http_status, content={"detail": exc.to_dict()})


app.include_router(health.router, tags=["health"])
app.include_router(auth.router, tags=["auth"])
app.include_router(menu.router, tags=["menu"])
app.include_router(cart.router, tags=["cart"])


def run() -> None:
    """Run the API with uvicorn."""
    uvicorn.run("food_ordering.main:app", host=settings.host, port=settings.port)
