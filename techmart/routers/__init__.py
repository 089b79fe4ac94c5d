"""
TechMart Routers

- pages: server-rendered cart page and HTML form actions
- webapp: JSON cart API under /api/webapp
"""

from .pages import router as pages_router
from .webapp import router as webapp_router

__all__ = ["pages_router", "webapp_router"]
