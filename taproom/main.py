"""Entry point for the taproom-order Textual app."""

from __future__ import annotations

import logging

from taproom.catalog import Catalog, CatalogUnavailable, build_catalog, load_raw_catalog
from taproom.config import CART_NAMESPACE, CATALOG_PATH, DB_PATH, DEBUG_LOG_PATH, DEFAULT_LANGUAGE, UI_NAMESPACE
from taproom.constant import SAMPLE_CATEGORIES, SAMPLE_ITEMS
from taproom.i18n import resolve_language
from taproom.ledger import CartLedger
from taproom.menu_app import TaproomApp
from taproom.persistence import SqliteCartStore

logger = logging.getLogger(__name__)


def configure_logging(path: str = DEBUG_LOG_PATH) -> None:
    """Append debug logs to ``path``; the terminal belongs to the UI."""
    try:
        handler: logging.Handler = logging.FileHandler(path, encoding="utf-8")
    except OSError:
        # Logging must never interfere with app flow.
        handler = logging.NullHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)


def load_catalog(path: str = CATALOG_PATH) -> Catalog:
    """Build the catalog from an exported file, or from the bundled sample menu."""
    if not path:
        return build_catalog(SAMPLE_CATEGORIES, SAMPLE_ITEMS)
    try:
        raw_categories, raw_items = load_raw_catalog(path)
    except CatalogUnavailable as exc:
        logger.error("%s", exc)
        return Catalog()
    return build_catalog(raw_categories, raw_items)


def main() -> None:
    """Run the Textual application."""
    configure_logging()
    store = SqliteCartStore(DB_PATH)
    store.bootstrap_schema()
    language = resolve_language(store.load_preference(UI_NAMESPACE, "language") or DEFAULT_LANGUAGE)
    ledger = CartLedger(store, CART_NAMESPACE)
    TaproomApp(load_catalog(), ledger, store, language).run()


if __name__ == "__main__":
    main()
