from .security import SecurityHeadersMiddleware
from .session import CartSessionMiddleware

__all__ = ["CartSessionMiddleware", "SecurityHeadersMiddleware"]
