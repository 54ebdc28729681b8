"""
Mock Store Application

An in-memory stand-in for the store API the storefront talks to:
catalog, per-user carts, coupon validation and payments.
"""

import os
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from dotenv import load_dotenv

from storefront.core.config import settings

from .routes import products_router, cart_router, coupons_router, payments_router

# Load environment variables
load_dotenv(os.path.join(os.path.dirname(__file__), "..", "config", ".env"))

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("Mock Store starting up...")
    yield
    logger.info("Mock Store shutting down...")


# Create FastAPI app
app = FastAPI(
    title="Mock Store",
    description="Simulated store API for storefront development and tests",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, restrict this
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Errors use the store's {success, message} envelope
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": str(exc.detail)},
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": message},
    )


# Include API routers
app.include_router(products_router)
app.include_router(cart_router)
app.include_router(coupons_router)
app.include_router(payments_router)


@app.get("/")
async def home():
    return {
        "message": "Mock Store API",
        "docs": "/docs",
        "endpoints": {
            "products": "/api/products",
            "cart": "/api/cart",
            "coupons": "/api/coupons/validate",
            "payments": "/api/payments",
        },
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "mock-store"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "mock_store.main:app",
        host=settings.mock_store_host,
        port=settings.mock_store_port,
        reload=settings.debug,
    )
