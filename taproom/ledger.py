"""Cart ledger: the single owner of what will be ordered."""

from __future__ import annotations

import logging
import threading
from typing import Protocol

from taproom.config import CART_NAMESPACE
from taproom.models import Cart, CartLine, Product
from taproom.pricing import resolve_price

logger = logging.getLogger(__name__)


class CartStore(Protocol):
    def load_cart(self, namespace: str) -> Cart | None: ...

    def save_cart(self, namespace: str, cart: Cart) -> None: ...


def line_total(line: CartLine) -> float:
    return resolve_price(line.product, line.selected_variant) * line.quantity


def cart_total(cart: Cart) -> float:
    """Sum of resolved unit price times quantity over all lines."""
    return sum((line_total(line) for line in cart.lines), 0.0)


def cart_item_count(cart: Cart) -> int:
    return sum(line.quantity for line in cart.lines)


class CartLedger:
    """Mergeable, persisted cart.

    Every mutation builds a new :class:`Cart`, writes it to the store and only
    then swaps it in, so the in-memory cart never runs ahead of the persisted
    one. A failing store raises and leaves the ledger unchanged.
    """

    def __init__(self, store: CartStore, namespace: str = CART_NAMESPACE) -> None:
        self._store = store
        self._namespace = namespace
        self._lock = threading.RLock()
        self._cart = store.load_cart(namespace) or Cart()
        logger.info("cart restored namespace=%s lines=%d", namespace, len(self._cart.lines))

    @property
    def cart(self) -> Cart:
        return self._cart

    @property
    def lines(self) -> tuple[CartLine, ...]:
        return self._cart.lines

    @property
    def notes(self) -> str:
        return self._cart.notes

    @property
    def is_empty(self) -> bool:
        return not self._cart.lines

    def find(self, product_id: str, variant: str | None = None) -> CartLine | None:
        key = (product_id, variant)
        for line in self._cart.lines:
            if line.key == key:
                return line
        return None

    def add(self, product: Product, variant: str | None = None) -> None:
        """Add one unit, merging with an existing ``(product.id, variant)`` line."""
        with self._lock:
            key = (product.id, variant)
            lines = list(self._cart.lines)
            for idx, line in enumerate(lines):
                if line.key == key:
                    lines[idx] = CartLine(line.product, line.quantity + 1, line.selected_variant)
                    break
            else:
                lines.append(CartLine(product=product, quantity=1, selected_variant=variant))
            self._commit(Cart(lines=tuple(lines), notes=self._cart.notes))

    def set_quantity(self, product_id: str, quantity: int, variant: str | None = None) -> None:
        """Overwrite a line's quantity in place; ``quantity <= 0`` removes it."""
        if quantity <= 0:
            self.remove(product_id, variant)
            return
        with self._lock:
            key = (product_id, variant)
            if self.find(product_id, variant) is None:
                return
            lines = tuple(
                CartLine(line.product, quantity, line.selected_variant) if line.key == key else line
                for line in self._cart.lines
            )
            self._commit(Cart(lines=lines, notes=self._cart.notes))

    def remove(self, product_id: str, variant: str | None = None) -> None:
        with self._lock:
            key = (product_id, variant)
            lines = tuple(line for line in self._cart.lines if line.key != key)
            if len(lines) == len(self._cart.lines):
                return
            self._commit(Cart(lines=lines, notes=self._cart.notes))

    def set_notes(self, text: str) -> None:
        with self._lock:
            self._commit(Cart(lines=self._cart.lines, notes=text))

    def clear(self) -> None:
        """Drop all lines and notes together."""
        with self._lock:
            self._commit(Cart())

    def total(self) -> float:
        return cart_total(self._cart)

    def item_count(self) -> int:
        return cart_item_count(self._cart)

    def _commit(self, cart: Cart) -> None:
        self._store.save_cart(self._namespace, cart)
        self._cart = cart
        logger.debug("cart committed lines=%d items=%d", len(cart.lines), cart_item_count(cart))
