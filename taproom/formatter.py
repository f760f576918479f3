"""Order message rendering and messaging-channel hand-off."""

from __future__ import annotations

import logging
import re
import string
import webbrowser
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable
from urllib.parse import quote

from taproom.config import CURRENCY_LABEL, MESSAGING_DOMAIN, PRICE_MULTIPLIER, WHATSAPP_PHONE
from taproom.i18n import Language, translate
from taproom.ledger import CartLedger, cart_total
from taproom.models import Cart
from taproom.pricing import resolve_price

logger = logging.getLogger(__name__)

_NUMERIC_SIZE = re.compile(r"\d+(?:\.\d+)?")
# Characters encodeURIComponent leaves untouched besides alphanumerics.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def format_price(price_in_thousands: float) -> str:
    """Format a stored price, e.g. ``15`` -> ``"15,000 VND"``."""
    value = (Decimal(str(price_in_thousands)) * PRICE_MULTIPLIER).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return f"{int(value):,} {CURRENCY_LABEL}"


def size_label(size: str) -> str:
    """Render a variant size; bare numbers are litres (``0.33`` -> ``0.33L``)."""
    if _NUMERIC_SIZE.fullmatch(size):
        return f"{size}L"
    return size


def format_order(cart: Cart, language: str | Language | None) -> str:
    """Render the cart as the plain-text order message."""
    out = [translate(language, "new_order"), ""]

    for idx, line in enumerate(cart.lines, start=1):
        unit_price = resolve_price(line.product, line.selected_variant)
        suffix = f" ({size_label(line.selected_variant)})" if line.selected_variant else ""
        out.append(f"{idx}. {line.product.name}{suffix}")
        out.append(
            f"   {line.quantity}x × {format_price(unit_price)} = {format_price(unit_price * line.quantity)}"
        )
        out.append("")

    out.append(f"{translate(language, 'total')}: {format_price(cart_total(cart))}")

    if cart.notes.strip():
        out.append("")
        out.append(f"{translate(language, 'notes')}: {cart.notes}")

    return "\n".join(out) + "\n"


def dispatch_target(message: str, channel_address: str) -> str:
    """Build the messaging URI carrying ``message`` for ``channel_address``."""
    digits = "".join(ch for ch in channel_address if ch in string.digits)
    return f"https://{MESSAGING_DOMAIN}/{digits}?text={quote(message, safe=_URI_COMPONENT_SAFE)}"


def send_order(
    ledger: CartLedger,
    language: str | Language | None,
    channel_address: str = WHATSAPP_PHONE,
    open_uri: Callable[[str], bool] = webbrowser.open,
) -> str:
    """Hand the formatted order to the messaging channel and clear the cart.

    The cart is cleared only when ``open_uri`` reports success. A
    :class:`PersistenceError` from that final clear means the order did go
    out and the cart is still populated.
    """
    if ledger.is_empty:
        raise ValueError("Cannot send an empty order")

    uri = dispatch_target(format_order(ledger.cart, language), channel_address)
    if not open_uri(uri):
        raise RuntimeError("Messaging channel could not be opened")

    logger.info("order handed off items=%d total=%s", ledger.item_count(), ledger.total())
    ledger.clear()
    return uri
