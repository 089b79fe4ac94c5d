"""
Server-rendered cart page.

Form posts follow post/redirect/get: every action mutates, then redirects
back so the next GET renders from the store.
"""
from pathlib import Path
from urllib.parse import urlparse

from fastapi import APIRouter, Depends, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from techmart.cart import (
    CartPage,
    ProductCard,
    StaleCartIndexError,
    UnknownCartActionError,
    extract_product_descriptor,
)
from techmart.errors import ERROR_STALE_INDEX, ERROR_UNKNOWN_ACTION
from techmart.routers.deps import build_cart_controller, confirmed_by_client, get_cart_session

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

# Header badge and mobile nav badge
COUNT_INDICATORS = 2

router = APIRouter(tags=["pages"])


def _back_to(referer: str | None, default: str = "/cart") -> str:
    """Same-origin path from the Referer header."""
    path = urlparse(referer or "").path
    return path if path.startswith("/") and not path.startswith(("//", "/\\")) else default


@router.get("/")
async def index():
    return RedirectResponse("/cart", status_code=303)


@router.get("/cart", response_class=HTMLResponse)
async def cart_page(request: Request, session_id: str = Depends(get_cart_session)):
    controller = build_cart_controller(session_id, page=CartPage(count_indicators=COUNT_INDICATORS))
    await controller.renderer.render()
    await controller.notifications.show(controller.page)
    return templates.TemplateResponse(request, "cart.html", {"page": controller.page})


@router.post("/cart/actions")
async def cart_action(
    action: str = Form(...),
    idx: int = Form(...),
    value: str | None = Form(None),
    confirmed: bool = Form(False),
    session_id: str = Depends(get_cart_session),
):
    controller = build_cart_controller(session_id, confirm=confirmed_by_client(confirmed))
    try:
        await controller.apply_action(action, idx, value)
    except UnknownCartActionError:
        raise HTTPException(status_code=400, detail=ERROR_UNKNOWN_ACTION)
    except StaleCartIndexError:
        await controller.notifications.notify(ERROR_STALE_INDEX, "error")
    return RedirectResponse("/cart", status_code=303)


@router.post("/cart/add")
async def cart_add(
    request: Request,
    name: str | None = Form(None),
    price: str | None = Form(None),
    image: str | None = Form(None),
    category: str | None = Form(None),
    session_id: str = Depends(get_cart_session),
):
    card = ProductCard(
        heading=name,
        price_text=price,
        image_src=image,
        data={"category": category} if category is not None else {},
    )
    controller = build_cart_controller(session_id, page=CartPage(has_cart_table=False))
    await controller.add_item(extract_product_descriptor(card))
    return RedirectResponse(_back_to(request.headers.get("referer")), status_code=303)
