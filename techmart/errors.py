"""
Common Error and Message Constants

Centralized user-facing strings to avoid duplication across the cart
controller, routers and templates.
"""

# Cart errors
ERROR_CART_UNAVAILABLE = "We couldn't save your cart. Please try again."
ERROR_STALE_INDEX = "Your cart changed. Please try again."
ERROR_UNKNOWN_ACTION = "Unknown cart action"

# Cart notifications
MSG_ITEM_ADDED = "Product added to cart!"
MSG_ITEM_REMOVED = "Item removed from cart"
