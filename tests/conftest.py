"""Pytest configuration and fixtures"""
import os
import pytest

# Tests always run against the in-process store
os.environ["UPSTASH_REDIS_REST_URL"] = ""
os.environ["UPSTASH_REDIS_REST_TOKEN"] = ""
os.environ.setdefault("LOG_LEVEL", "WARNING")

from techmart.cart import CartController, CartPage, CartRepository, NotificationChannel
from techmart.db import MemoryStore, reset_store

SESSION_ID = "test-session-0123456789"


class FakeClock:
    """Monotonic clock the tests advance by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    """Memory store wired as the app-wide singleton."""
    memory = MemoryStore(clock=clock)
    reset_store(memory)
    yield memory
    reset_store(None)


@pytest.fixture
def repository(store):
    return CartRepository(store, SESSION_ID)


@pytest.fixture
def notifications(store):
    return NotificationChannel(store, SESSION_ID)


@pytest.fixture
def page():
    return CartPage(count_indicators=2)


@pytest.fixture
def confirm_answers():
    """Answers handed to the confirmation prompt, plus the prompts that were shown."""
    return {"answer": True, "asked": []}


@pytest.fixture
def controller(repository, page, notifications, confirm_answers):
    def confirm(message: str) -> bool:
        confirm_answers["asked"].append(message)
        return confirm_answers["answer"]

    return CartController(repository, page, notifications, confirm=confirm)


@pytest.fixture
def sample_product():
    """Product descriptor fields as painted on a catalog card"""
    return {
        "name": "Red Printed T-Shirt",
        "price": "₹50",
        "image": "https://images.unsplash.com/photo-1521572163474-6864f9cf17ab",
        "category": "Fashion",
    }
