from __future__ import annotations

import pytest

from taproom.ledger import CartLedger
from taproom.models import BeerMetadata, Cart, Product, ProductMetadata, VariantPrice
from taproom.persistence import PersistenceError, SqliteCartStore


class FlakyStore:
    """In-test store that can be switched into a failing state."""

    def __init__(self) -> None:
        self.saved: Cart | None = None
        self.fail = False

    def load_cart(self, namespace: str) -> Cart | None:
        return self.saved

    def save_cart(self, namespace: str, cart: Cart) -> None:
        if self.fail:
            raise PersistenceError("disk full")
        self.saved = cart


@pytest.fixture
def store(tmp_path):
    cart_store = SqliteCartStore(tmp_path / "taproom.db")
    cart_store.bootstrap_schema()
    return cart_store


@pytest.fixture
def flaky_store():
    return FlakyStore()


@pytest.fixture
def ledger(store):
    return CartLedger(store)


@pytest.fixture
def pilsner():
    return Product(
        id="beer-pilsner",
        name="Pilsner",
        category="beers",
        price=25,
        variant_prices=(
            VariantPrice(id="v-033", size="0.33", price=25),
            VariantPrice(id="v-050", size="0.50", price=35),
        ),
        metadata=ProductMetadata(beer=BeerMetadata(ibu=20, abv=4.8)),
    )


@pytest.fixture
def legacy_ipa():
    return Product(
        id="beer-ipa",
        name="IPA",
        category="beers",
        price=60,
        metadata=ProductMetadata(beer=BeerMetadata(ibu=40, abv=6.5, size_033=60, size_050=85)),
    )


@pytest.fixture
def fries():
    return Product(id="snack-fries", name="Fries", category="snacks", price=50)
