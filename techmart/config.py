"""
Storefront configuration.

All settings come from environment variables. Values that define cart
semantics (tax rate, notification lifetime, display currency) are fixed
constants and deliberately not read from the environment.
"""
import os
from decimal import Decimal


def _int_env(name: str, default: int) -> int:
    """Read an integer environment variable, falling back to default."""
    raw = os.environ.get(name, "")
    try:
        return int(raw) if raw.strip() else default
    except ValueError:
        return default


# Upstash Redis - standard env var names per docs
UPSTASH_REDIS_REST_URL = os.environ.get("UPSTASH_REDIS_REST_URL", "")
UPSTASH_REDIS_REST_TOKEN = os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")

# Cart persistence (0 = keep until the store evicts it)
CART_TTL_SECONDS = _int_env("CART_TTL_SECONDS", 0)

# Browser scoping
CART_SESSION_COOKIE = os.environ.get("CART_SESSION_COOKIE", "techmart_cart")
CART_SESSION_MAX_AGE = _int_env("CART_SESSION_MAX_AGE", 60 * 60 * 24 * 365)

# Fixed cart semantics
TAX_RATE = Decimal("0.0333")
NOTIFICATION_CLEAR_MS = 3000
DISPLAY_CURRENCY = "INR"


def redis_configured() -> bool:
    """True when both Upstash credentials are present."""
    return bool(UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN)
