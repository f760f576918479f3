"""Price resolution for a product and an optional selected variant."""

from __future__ import annotations

from taproom.models import Product

LEGACY_SIZE_033 = "0.33"
LEGACY_SIZE_050 = "0.50"


def _legacy_price(product: Product, selected_variant: str) -> float | None:
    beer = product.metadata.beer if product.metadata else None
    if beer is None:
        return None
    if selected_variant == LEGACY_SIZE_033:
        return beer.size_033
    if selected_variant == LEGACY_SIZE_050:
        return beer.size_050
    return None


def resolve_price(product: Product, selected_variant: str | None = None) -> float:
    """Return the unit price to charge.

    Resolution order:
    1. matching entry of ``product.variant_prices``
    2. legacy 0.33 / 0.50 pair embedded in ``metadata.beer``
    3. ``product.price``
    """
    if selected_variant is not None:
        for variant in product.variant_prices:
            if variant.size == selected_variant:
                return variant.price

        legacy = _legacy_price(product, selected_variant)
        if legacy is not None:
            return legacy

    return product.price


def variant_options(product: Product) -> list[tuple[str, float]]:
    """List purchasable ``(size, price)`` pairs; empty for single-price products."""
    if product.variant_prices:
        return [(variant.size, variant.price) for variant in product.variant_prices]

    beer = product.metadata.beer if product.metadata else None
    if beer is not None and beer.size_033 is not None and beer.size_050 is not None:
        return [(LEGACY_SIZE_033, beer.size_033), (LEGACY_SIZE_050, beer.size_050)]
    return []


def default_variant(product: Product) -> str | None:
    options = variant_options(product)
    if not options:
        return None
    return options[0][0]
