"""Tests for the cart controller (mutations, dispatch, notifications)"""
import pytest
from unittest.mock import AsyncMock

from techmart.cart import (
    Cart,
    CartAction,
    CartController,
    CartPage,
    CartRepository,
    NotificationChannel,
    ProductDescriptor,
    StaleCartIndexError,
    UnknownCartActionError,
    seed_cart,
)
from techmart.cart.service import new_item_id, parse_quantity
from techmart.db import MemoryStore, RedisKeys
from techmart.errors import ERROR_CART_UNAVAILABLE, MSG_ITEM_ADDED, MSG_ITEM_REMOVED
from conftest import SESSION_ID

T_SHIRT = ProductDescriptor(name="Red Printed T-Shirt", price=50, image="", category="Fashion")


async def quantities(repository) -> list:
    return [item.quantity for item in (await repository.load()).items]


async def names(repository) -> list:
    return [item.name for item in (await repository.load()).items]


class TestParseQuantity:

    @pytest.mark.parametrize("raw,expected", [
        ("5", 5),
        (" 7", 7),
        ("12abc", 12),
        ("3.7", 3),
        ("+4", 4),
        ("abc", 1),
        ("", 1),
        (None, 1),
        ("0", 1),
        ("-2", 1),
        (6, 6),
        (0, 1),
        (True, 1),
        ("9" * 5000, 1),
    ])
    def test_parse_quantity(self, raw, expected):
        """Test parsing a quantity input."""
        assert parse_quantity(raw) == expected


def test_new_item_id_is_unique_within_cart(monkeypatch):
    """Test new item ids never collide within a cart."""
    monkeypatch.setattr("techmart.cart.service.time.time", lambda: 1700000000.0)
    cart = Cart()
    first = new_item_id(cart)
    cart.items.append(seed_cart().items[0])
    cart.items[0].id = first

    assert first == "1700000000000"
    assert new_item_id(cart) == "1700000000001"


class TestAddItem:

    @pytest.mark.asyncio
    async def test_add_matching_product_merges(self, controller, repository, page):
        """Test adding a matching product increments its line."""
        await controller.add_item(T_SHIRT)

        cart = await repository.load()
        assert len(cart) == 3
        assert [item.quantity for item in cart.items] == [1, 3, 1]
        assert [element.text for element in page.counts] == ["5", "5"]

    @pytest.mark.asyncio
    async def test_add_new_product_appends(self, controller, repository):
        """Test adding a new product appends a line."""
        item = await controller.add_item(ProductDescriptor(name="USB-C Cable", price=199, category="Accessories"))

        cart = await repository.load()
        assert len(cart) == 4
        assert cart.items[-1].name == "USB-C Cable"
        assert cart.items[-1].quantity == 1
        assert cart.items[-1].id == item.id
        assert item.id not in {"1", "2", "3"}

    @pytest.mark.asyncio
    async def test_same_name_different_price_is_a_new_line(self, controller, repository):
        """Test the same name at a different price is a new line."""
        await controller.add_item(ProductDescriptor(name="Red Printed T-Shirt", price=60))
        assert await quantities(repository) == [1, 2, 1, 1]

    @pytest.mark.asyncio
    async def test_add_notifies_success(self, controller, notifications):
        """Test adding notifies success."""
        await controller.add_item(T_SHIRT)
        assert await notifications.current() == {"message": MSG_ITEM_ADDED, "severity": "success"}

    @pytest.mark.asyncio
    async def test_add_does_not_render_table(self, controller, page):
        """Test adding only refreshes the count badge."""
        await controller.add_item(T_SHIRT)
        assert page.rows == []


class TestQuantityChanges:

    @pytest.mark.asyncio
    async def test_increment(self, controller, repository, page):
        """Test incrementing a quantity."""
        await controller.increment_quantity(0)

        assert await quantities(repository) == [2, 2, 1]
        assert page.rows[0].quantity == 2
        assert page.count == "5"

    @pytest.mark.asyncio
    async def test_decrement(self, controller, repository):
        """Test decrementing a quantity."""
        await controller.decrement_quantity(1)
        assert await quantities(repository) == [1, 1, 1]

    @pytest.mark.asyncio
    async def test_decrement_never_goes_below_one(self, controller, repository):
        """Test quantity never drops below 1."""
        for _ in range(5):
            await controller.decrement_quantity(1)
            assert min(await quantities(repository)) >= 1

        assert await quantities(repository) == [1, 1, 1]

    @pytest.mark.asyncio
    async def test_decrement_at_one_skips_write(self, controller, store, page):
        """Test decrementing at 1 writes nothing."""
        await controller.decrement_quantity(0)

        assert await store.get(RedisKeys.cart_key(SESSION_ID)) is None
        assert page.rows[0].quantity == 1

    @pytest.mark.asyncio
    async def test_set_quantity(self, controller, repository):
        """Test setting a quantity."""
        await controller.set_quantity(2, "6")
        assert await quantities(repository) == [1, 2, 6]

    @pytest.mark.asyncio
    async def test_set_quantity_clamps_garbage_to_one(self, controller, repository):
        """Test an unparseable quantity becomes 1."""
        await controller.set_quantity(1, "abc")
        assert await quantities(repository) == [1, 1, 1]

    @pytest.mark.asyncio
    async def test_set_quantity_with_oversized_digit_run(self, controller, repository, page):
        """Test an unconvertible digit run falls back to a quantity of 1."""
        await controller.set_quantity(0, "9" * 5000)

        assert await quantities(repository) == [1, 2, 1]
        assert page.rows[0].quantity == 1


class TestRemoveItem:

    @pytest.mark.asyncio
    async def test_remove_after_confirmation(self, controller, repository, notifications, confirm_answers, page):
        """Test removing an item after confirmation."""
        removed = await controller.remove_item(1)

        assert removed is True
        assert confirm_answers["asked"] == ["Remove Red Printed T-Shirt from cart?"]
        assert await names(repository) == ["OnePlus Nord CE 2 5G", "Redmi Note 11 Pro + 5G"]
        assert await notifications.current() == {"message": MSG_ITEM_REMOVED, "severity": "info"}
        assert [row.index for row in page.rows] == [0, 1]
        assert page.rows[1].name == "Redmi Note 11 Pro + 5G"

    @pytest.mark.asyncio
    async def test_declined_confirmation_changes_nothing(self, controller, store, notifications, confirm_answers):
        """Test declining the confirmation changes nothing."""
        confirm_answers["answer"] = False

        removed = await controller.remove_item(1)

        assert removed is False
        assert await store.get(RedisKeys.cart_key(SESSION_ID)) is None
        assert await notifications.current() is None
        assert len(controller.page.rows) == 3

    @pytest.mark.asyncio
    async def test_async_confirmation(self, repository, page, notifications):
        """Test an async confirmation callable."""
        confirm = AsyncMock(return_value=True)
        controller = CartController(repository, page, notifications, confirm=confirm)

        assert await controller.remove_item(0) is True
        confirm.assert_awaited_once_with("Remove OnePlus Nord CE 2 5G from cart?")

    @pytest.mark.asyncio
    async def test_without_confirmation_port_nothing_is_removed(self, repository, page, notifications):
        """Test nothing is removed without a confirmation callable."""
        controller = CartController(repository, page, notifications)

        assert await controller.remove_item(0) is False
        assert len(await repository.load()) == 3

    @pytest.mark.asyncio
    async def test_removing_everything_shows_empty_state(self, controller, repository, page):
        """Test removing every item shows the empty state."""
        for _ in range(3):
            await controller.remove_item(0)

        assert (await repository.load()).is_empty
        assert page.empty_message.visible
        assert not page.table_wrapper.visible
        assert not page.summary.visible
        assert page.count == "0"

    @pytest.mark.asyncio
    async def test_indices_are_rederived_after_remove(self, controller, repository, page):
        """Test row indices are rederived after a remove."""
        await controller.remove_item(0)
        # Old index 2 no longer exists; the Redmi phone is now row 1
        with pytest.raises(StaleCartIndexError):
            await controller.increment_quantity(2)

        await controller.increment_quantity(page.rows[1].index)
        assert await quantities(repository) == [2, 2]


class TestDispatch:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("action,index,payload,expected", [
        (CartAction.INCREMENT, 0, None, [2, 2, 1]),
        ("decrement", 1, None, [1, 1, 1]),
        ("set_quantity", 2, "9", [1, 2, 9]),
    ])
    async def test_apply_action(self, controller, repository, action, index, payload, expected):
        """Test dispatching row actions."""
        await controller.apply_action(action, index, payload)
        assert await quantities(repository) == expected

    @pytest.mark.asyncio
    async def test_apply_remove(self, controller, repository):
        """Test dispatching remove."""
        await controller.apply_action(CartAction.REMOVE, 0)
        assert len(await repository.load()) == 2

    @pytest.mark.asyncio
    async def test_unknown_action(self, controller):
        """Test an unknown action raises."""
        with pytest.raises(UnknownCartActionError):
            await controller.apply_action("explode", 0)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("index", [-1, 3, 100])
    async def test_out_of_range_index(self, controller, store, index):
        """Test an out-of-range index raises without writing."""
        with pytest.raises(StaleCartIndexError):
            await controller.apply_action(CartAction.INCREMENT, index)
        assert await store.get(RedisKeys.cart_key(SESSION_ID)) is None


class TestWriteFailure:

    @pytest.fixture
    def failing_controller(self, page, notifications):
        store = MemoryStore()
        store.set = AsyncMock(side_effect=ConnectionError("write refused"))
        repository = CartRepository(store, SESSION_ID)
        return CartController(repository, page, notifications, confirm=lambda message: True)

    @pytest.mark.asyncio
    async def test_failed_write_notifies_and_renders_stored_state(self, failing_controller, notifications, page):
        """Test a failed write notifies and renders the stored cart."""
        await failing_controller.increment_quantity(0)

        assert await notifications.current() == {"message": ERROR_CART_UNAVAILABLE, "severity": "error"}
        # View reflects what the store holds (the seed), not the lost mutation
        assert page.rows[0].quantity == 1

    @pytest.mark.asyncio
    async def test_failed_remove_reports_false(self, failing_controller, notifications, page):
        """Test a failed remove reports False."""
        assert await failing_controller.remove_item(0) is False
        assert len(page.rows) == 3
        assert (await notifications.current())["severity"] == "error"

    @pytest.mark.asyncio
    async def test_failed_add_skips_success_notification(self, failing_controller, notifications, page):
        """Test a failed add shows no success message."""
        await failing_controller.add_item(T_SHIRT)

        assert (await notifications.current())["message"] == ERROR_CART_UNAVAILABLE
        assert page.count == "4"


@pytest.mark.asyncio
async def test_summary(controller):
    """Test the cart summary."""
    summary = await controller.summary()

    assert summary["total_items"] == 4
    assert summary["subtotal"] == 900.0
    assert summary["total_display"] == "₹929.97"
    assert [item["id"] for item in summary["items"]] == ["1", "2", "3"]


@pytest.mark.asyncio
async def test_two_sessions_do_not_share_a_cart(store, notifications):
    """Test two sessions keep separate carts."""
    first = CartController(CartRepository(store, "session-a-0000000000"), CartPage(), notifications)
    second = CartController(CartRepository(store, "session-b-0000000000"), CartPage(), notifications)

    await first.increment_quantity(0)

    assert (await second.repository.load()).items[0].quantity == 1
