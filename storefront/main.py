"""
Storefront Application

Cart, coupon and checkout session service for the storefront UI.
"""

import os
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from .routes import sessions_router, cart_router, checkout_router
from .core.config import settings

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
    logger.info("Storefront starting up...")
    logger.info(f"Store URL: {settings.store_base_url}")

    yield

    logger.info("Storefront shutting down...")
    # Cleanup store client
    from .routes.sessions import store_client
    if store_client:
        await store_client.close()


# Create FastAPI app
app = FastAPI(
    title="Storefront",
    description="Cart, coupon and checkout sessions for the storefront",
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

# Include routers
app.include_router(sessions_router)
app.include_router(cart_router)
app.include_router(checkout_router)


@app.get("/")
async def home():
    return {
        "message": "Storefront API",
        "docs": "/docs",
        "endpoints": {
            "sessions": "/api/sessions",
            "cart": "/api/sessions/{session_id}/items",
            "checkout": "/api/sessions/{session_id}/checkout",
        },
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "storefront",
        "store_configured": bool(settings.store_base_url),
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "storefront.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
