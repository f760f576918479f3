from __future__ import annotations

from taproom.models import BeerMetadata, Product, ProductMetadata, VariantPrice
from taproom.pricing import default_variant, resolve_price, variant_options


def test_variant_list_price_is_used_for_matching_size(pilsner):
    assert resolve_price(pilsner, "0.50") == 35
    assert resolve_price(pilsner, "0.33") == 25


def test_legacy_pair_is_used_when_no_variant_list(legacy_ipa):
    assert resolve_price(legacy_ipa, "0.33") == 60
    assert resolve_price(legacy_ipa, "0.50") == 85


def test_variant_list_wins_over_legacy_pair_for_same_size():
    product = Product(
        id="transition",
        name="Transition Ale",
        category="beers",
        price=40,
        variant_prices=(VariantPrice(id="v", size="0.50", price=55),),
        metadata=ProductMetadata(beer=BeerMetadata(size_033=40, size_050=99)),
    )

    assert resolve_price(product, "0.50") == 55
    # 0.33 is missing from the list, so the legacy pair still answers.
    assert resolve_price(product, "0.33") == 40


def test_unknown_or_missing_variant_falls_back_to_base_price(pilsner, fries):
    assert resolve_price(pilsner, "1.00") == pilsner.price
    assert resolve_price(pilsner) == pilsner.price
    assert resolve_price(fries, "0.33") == 50


def test_legacy_pair_with_missing_half_falls_back_to_base():
    product = Product(
        id="half",
        name="Half",
        category="beers",
        price=30,
        metadata=ProductMetadata(beer=BeerMetadata(size_033=28)),
    )

    assert resolve_price(product, "0.50") == 30
    assert variant_options(product) == []


def test_variant_options(pilsner, legacy_ipa, fries):
    assert variant_options(pilsner) == [("0.33", 25), ("0.50", 35)]
    assert variant_options(legacy_ipa) == [("0.33", 60), ("0.50", 85)]
    assert variant_options(fries) == []
    assert default_variant(pilsner) == "0.33"
    assert default_variant(fries) is None
