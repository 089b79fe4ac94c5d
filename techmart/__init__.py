"""
TechMart Core Module

This package contains the storefront cart components:
- config: Environment-driven settings
- db: Key-value store clients (Upstash Redis or in-process memory)
- cart: Cart state, pricing, rendering and mutation controller
- routers: FastAPI routers for the cart pages and JSON API

Note: Imports are lazy to keep module loading cheap in serverless environments.
"""

__all__ = [
    "get_store",
    "get_logger",
]


def __getattr__(name):
    """Lazy attribute access for clean serverless loading."""
    if name == "get_store":
        from techmart.db import get_store
        return get_store
    elif name == "get_logger":
        from techmart.logging import get_logger
        return get_logger
    raise AttributeError(f"module 'techmart' has no attribute '{name}'")
