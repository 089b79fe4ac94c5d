"""Transient cart status messages for the accessible notification region."""
import json
from typing import Optional

from techmart.db import RedisKeys, Store, TTL
from techmart.logging import get_logger
from .page import CartPage

logger = get_logger(__name__)


class NotificationChannel:
    """
    One live status message per cart session.

    The message is stored with a millisecond expiry, so it clears itself
    after the fixed delay. A new message overwrites the pending one.
    """

    def __init__(self, store: Store, session_id: str, clear_after_ms: int = TTL.NOTIFICATION_MS):
        self.store = store
        self.session_id = session_id
        self.clear_after_ms = clear_after_ms

    @property
    def key(self) -> str:
        return RedisKeys.notification_key(self.session_id)

    async def notify(self, message: str, severity: str = "info") -> None:
        payload = json.dumps({"message": message, "severity": severity})
        try:
            await self.store.set(self.key, payload, px=self.clear_after_ms)
        except Exception as e:
            # Status messages are best effort; losing one must not fail the mutation
            logger.warning(f"Failed to store cart notification: {e}")

    async def current(self) -> Optional[dict]:
        try:
            data = await self.store.get(self.key)
            return json.loads(data) if data else None
        except Exception as e:
            logger.warning(f"Failed to read cart notification: {e}")
            return None

    async def show(self, page: CartPage) -> None:
        """Write the live message (or nothing) into the page's status region."""
        live = await self.current()
        page.notification.text = live["message"] if live else ""
        page.notification_severity = live.get("severity", "info") if live else ""
