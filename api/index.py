"""
TechMart Storefront - Main FastAPI Application

Single entry point for the cart page and the cart JSON API.
"""
from contextlib import asynccontextmanager

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI

from techmart.db import get_store
from techmart.logging import get_logger
from techmart.middleware import CartSessionMiddleware, SecurityHeadersMiddleware
from techmart.routers import pages_router, webapp_router

logger = get_logger(__name__)


# ==================== FASTAPI APP ====================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    # Startup: resolve the store once so a misconfiguration shows up in the boot log
    store = get_store()
    logger.info(f"Cart store: {type(store).__name__}")
    yield


app = FastAPI(
    title="TechMart Storefront",
    description="Storefront shopping cart",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(CartSessionMiddleware)

app.include_router(pages_router)
app.include_router(webapp_router)


# ==================== HEALTH CHECK ====================

@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok", "service": "techmart"}
