"""
WebApp Cart Router

JSON projection of the cart page. Every mutating endpoint returns the
freshly rendered page so the client never has to reconcile state itself.
"""
from fastapi import APIRouter, Depends, HTTPException

from techmart.cart import CartPage, StaleCartIndexError, extract_product_descriptor
from techmart.errors import ERROR_STALE_INDEX
from techmart.routers.deps import build_cart_controller, confirmed_by_client, get_cart_session
from .models import CartActionRequest, ProductCardRequest

router = APIRouter(tags=["webapp-cart"])


@router.get("/cart")
async def get_webapp_cart(session_id: str = Depends(get_cart_session)):
    """Render the cart page state."""
    controller = build_cart_controller(session_id)
    await controller.renderer.render()
    await controller.notifications.show(controller.page)
    return controller.page.to_dict()


@router.get("/cart/summary")
async def get_webapp_cart_summary(session_id: str = Depends(get_cart_session)):
    """Cart items and exact totals."""
    controller = build_cart_controller(session_id)
    return await controller.summary()


@router.get("/cart/count")
async def get_webapp_cart_count(session_id: str = Depends(get_cart_session)):
    """Count badge value."""
    controller = build_cart_controller(session_id, page=CartPage(has_cart_table=False))
    return {"count": await controller.badge.refresh()}


@router.post("/cart/actions")
async def apply_cart_action(request: CartActionRequest, session_id: str = Depends(get_cart_session)):
    """Dispatch a row control (increment, decrement, set_quantity, remove)."""
    controller = build_cart_controller(session_id, confirm=confirmed_by_client(request.confirmed))
    try:
        await controller.apply_action(request.action, request.index, request.value)
    except StaleCartIndexError:
        raise HTTPException(status_code=409, detail=ERROR_STALE_INDEX)

    await controller.notifications.show(controller.page)
    return controller.page.to_dict()


@router.post("/cart/add")
async def add_to_cart(request: ProductCardRequest, session_id: str = Depends(get_cart_session)):
    """Add the product shown on a catalog card."""
    controller = build_cart_controller(session_id, page=CartPage(has_cart_table=False))
    product = extract_product_descriptor(request.to_card())
    await controller.add_item(product)

    await controller.notifications.show(controller.page)
    page = controller.page.to_dict()
    return {"count": page["count"], "notification": page["notification"]}
