"""Runtime configuration defaults for persistence, catalog and dispatch."""

from __future__ import annotations

import os

DB_PATH = os.environ.get("TAPROOM_DB_PATH", "data/taproom.db")

# Empty means "use the bundled sample menu".
CATALOG_PATH = os.environ.get("TAPROOM_CATALOG_PATH", "")

CART_NAMESPACE = "taproom-cart"
UI_NAMESPACE = "taproom-ui"

WHATSAPP_PHONE = os.environ.get("TAPROOM_WHATSAPP_PHONE", "+84367871781")
MESSAGING_DOMAIN = "wa.me"

DEFAULT_LANGUAGE = os.environ.get("TAPROOM_LANGUAGE", "en")

# Stored prices are thousands of the currency unit.
PRICE_MULTIPLIER = 1000
CURRENCY_LABEL = "VND"

DEBUG_LOG_PATH = os.environ.get("TAPROOM_DEBUG_LOG", "/tmp/taproom-debug.log")
