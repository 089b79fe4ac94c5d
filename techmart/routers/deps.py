"""
Shared Dependencies for Routers

Builds the per-request cart objects. Nothing here is cached across
requests except the store singleton: each request gets a fresh page,
repository and controller.
"""

from typing import Optional

from fastapi import Request

from techmart.cart import CartController, CartPage, CartRepository, NotificationChannel
from techmart.cart.service import Confirm
from techmart.db import get_store


def get_cart_session(request: Request) -> str:
    """Cart session token set by CartSessionMiddleware."""
    return request.state.cart_session


def build_cart_controller(
    session_id: str,
    page: Optional[CartPage] = None,
    confirm: Optional[Confirm] = None,
) -> CartController:
    store = get_store()
    return CartController(
        repository=CartRepository(store, session_id),
        page=page or CartPage(),
        notifications=NotificationChannel(store, session_id),
        confirm=confirm,
    )


def confirmed_by_client(confirmed: bool) -> Confirm:
    """Confirmation answered by the browser's prompt before the request was sent."""
    return lambda message: confirmed
