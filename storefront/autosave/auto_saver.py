"""
Auto-save Coordinator

Coalesces rapid edits of a shop or product into one write after a quiet
period. One debouncer per record, so edits to different records never
cancel each other.
"""

import logging
from typing import Any, Callable, Dict, Optional

from ..backend.records import ProductStore, ShopStore
from ..common.constants import DEFAULT_AUTOSAVE_DELAY_MS
from .debouncer import Debouncer, TimerFactory

logger = logging.getLogger(__name__)


class AutoSaver:
    """
    Debounced persistence of shop and product edits.

    Only the last change set passed within one window is written.

    Usage:
        saver = AutoSaver(shop_store, product_store, wait_ms=1000)
        saver.save_shop(shop.id, {"description": "New"})
        saver.flush_all()   # e.g. before navigating away
    """

    def __init__(
        self,
        shop_store: ShopStore,
        product_store: ProductStore,
        wait_ms: int = DEFAULT_AUTOSAVE_DELAY_MS,
        timer_factory: Optional[TimerFactory] = None,
    ):
        self.shop_store = shop_store
        self.product_store = product_store
        self.wait_ms = wait_ms
        self._timer_factory = timer_factory
        self._debouncers: Dict[str, Debouncer] = {}

    def _schedule(self, key: str, persist: Callable[[str, Dict[str, Any]], None],
                  record_id: str, changes: Dict[str, Any]) -> None:
        debouncer = self._debouncers.get(key)
        if debouncer is None:
            debouncer = Debouncer(persist, self.wait_ms, self._timer_factory)
            self._debouncers[key] = debouncer
        debouncer(record_id, changes)

    def _persist_shop(self, shop_id: str, changes: Dict[str, Any]) -> None:
        if not self.shop_store.client.is_configured():
            logger.warning("Supabase is not configured, shop %s not saved", shop_id)
            return
        if self.shop_store.update_shop(shop_id, changes) is None:
            logger.warning("Auto-save of shop %s failed", shop_id)

    def _persist_product(self, product_id: str, changes: Dict[str, Any]) -> None:
        if not self.product_store.client.is_configured():
            logger.warning("Supabase is not configured, product %s not saved", product_id)
            return
        if self.product_store.update_product(product_id, changes) is None:
            logger.warning("Auto-save of product %s failed", product_id)

    def save_shop(self, shop_id: str, changes: Dict[str, Any]) -> None:
        self._schedule(f"shop:{shop_id}", self._persist_shop, shop_id, changes)

    def save_product(self, product_id: str, changes: Dict[str, Any]) -> None:
        self._schedule(f"product:{product_id}", self._persist_product, product_id, changes)

    @property
    def pending(self) -> bool:
        return any(d.pending for d in self._debouncers.values())

    def flush_all(self) -> None:
        """Write every pending change now."""
        for debouncer in list(self._debouncers.values()):
            debouncer.flush()

    def cancel_all(self) -> None:
        for debouncer in self._debouncers.values():
            debouncer.cancel()
