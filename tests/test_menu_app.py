from __future__ import annotations

import asyncio

from taproom.catalog import build_catalog
from taproom.constant import SAMPLE_CATEGORIES, SAMPLE_ITEMS
from taproom.i18n import Language
from taproom.ledger import CartLedger
from taproom.menu_app import TaproomApp


def _send(app: TaproomApp) -> None:
    async def run() -> None:
        async with app.run_test():
            app.action_send_order()

    asyncio.run(run())


def test_failed_clear_after_hand_off_is_not_reported_as_unsent(flaky_store, fries):
    ledger = CartLedger(flaky_store)
    ledger.add(fries)
    opened = []

    def open_and_break_store(target):
        opened.append(target)
        flaky_store.fail = True
        return True

    app = TaproomApp(
        build_catalog(SAMPLE_CATEGORIES, SAMPLE_ITEMS),
        ledger,
        flaky_store,
        Language.EN,
        open_uri=open_and_break_store,
    )
    _send(app)

    assert len(opened) == 1
    assert app.system_status.startswith("Order sent, cart not cleared")
    assert ledger.item_count() == 1


def test_channel_failure_is_reported_as_unsent(flaky_store, fries):
    ledger = CartLedger(flaky_store)
    ledger.add(fries)

    app = TaproomApp(
        build_catalog(SAMPLE_CATEGORIES, SAMPLE_ITEMS),
        ledger,
        flaky_store,
        Language.EN,
        open_uri=lambda target: False,
    )
    _send(app)

    assert app.system_status.startswith("Order not sent")
    assert ledger.item_count() == 1
