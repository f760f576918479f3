from __future__ import annotations

import pytest

from taproom.models import BeerMetadata, VariantPrice, WineMetadata
from taproom.normalizer import normalize_category, normalize_product, parse_number


def test_legacy_beer_keeps_fixed_size_pair():
    raw = {
        "id": "ipa",
        "name": "IPA",
        "price": 65,
        "metadata": {"beer": {"ibu": 35, "abv": 6.5, "size033ml": 65, "size050ml": 90}},
    }

    product = normalize_product(raw, "beers")

    assert product.price == 65
    assert product.variant_prices == ()
    assert product.metadata.beer == BeerMetadata(ibu=35, abv=6.5, size_033=65, size_050=90)
    assert product.raw_metadata == {}


def test_size_list_is_sorted_and_lowest_price_becomes_display_price():
    raw = {
        "id": "pils",
        "name": "Pilsner",
        "price": 999,
        "prices": [
            {"id": "b", "size": "0.50", "price": 70},
            {"id": "a", "size": "0.33", "price": "50"},
        ],
    }

    product = normalize_product(raw, "beers")

    assert product.variant_prices == (
        VariantPrice(id="a", size="0.33", price=50),
        VariantPrice(id="b", size="0.50", price=70),
    )
    assert product.price == 50


def test_price_per_size_synonym_and_flat_database_columns():
    raw = {
        "id": 7,
        "name": "Stout",
        "ibu": "40",
        "abv": "7.2",
        "price_per_size": [{"size": "0.33", "price": 75}],
        "metadata": {"brewery": "Heart of Darkness", "abv": "oops", "region": "ignored"},
    }

    product = normalize_product(raw, "beers")

    assert product.id == "7"
    assert product.variant_prices == (VariantPrice(id="7:0.33", size="0.33", price=75),)
    # metadata.abv is malformed, so the flat column wins.
    assert product.metadata.beer.ibu == 40
    assert product.metadata.beer.abv == 7.2
    assert product.raw_metadata == {"brewery": "Heart of Darkness"}


def test_modern_wine_field_beats_legacy_synonym():
    raw = {
        "id": "malbec",
        "name": "Malbec",
        "wine_region": "Old Region",
        "wine_country": "Argentina",
        "wine_style": "Full-bodied",
        "metadata": {"region": "Mendoza", "grapeVariety": "Malbec", "vintage": 2020},
    }

    product = normalize_product(raw, "wines")

    assert product.metadata.wine == WineMetadata(
        region="Mendoza", country="Argentina", grape_variety="Malbec", style="Full-bodied"
    )
    assert product.raw_metadata == {"vintage": 2020}


def test_malformed_fields_degrade_to_absent():
    raw = {
        "id": "x",
        "name": "Mystery",
        "price": "free",
        "tags": "not-a-list",
        "prices": [{"size": "", "price": 10}, {"size": "big", "price": "NaN"}, "junk"],
        "metadata": {"beer": {"ibu": "abc", "abv": True}},
    }

    product = normalize_product(raw, "snacks")

    assert product.price == 0
    assert product.variant_prices == ()
    assert product.metadata is None


def test_minimal_record_yields_non_negative_price():
    product = normalize_product({"id": "a", "name": "A", "price": -5}, "snacks")

    assert product.price == 0
    assert product.description == ""
    assert product.subcategory is None


def test_duplicate_sizes_keep_first_entry():
    raw = {
        "id": "d",
        "name": "Dup",
        "prices": [{"size": "0.33", "price": 30}, {"size": "0.33", "price": 10}],
    }

    product = normalize_product(raw, "beers")

    assert [(v.size, v.price) for v in product.variant_prices] == [("0.33", 30)]


def test_unusable_prices_list_falls_through_to_price_per_size():
    raw = {
        "id": "s",
        "name": "Stout",
        "prices": [{"size": "", "price": 30}, {"size": "0.33", "price": "abc"}],
        "price_per_size": [{"size": "0.50", "price": 70}, {"size": "0.33", "price": 50}],
    }

    product = normalize_product(raw, "beers")

    assert [(v.size, v.price) for v in product.variant_prices] == [("0.33", 50), ("0.50", 70)]
    assert product.price == 50


def test_whole_ibu_becomes_integer():
    whole = normalize_product({"id": "a", "name": "A", "metadata": {"ibu": "45.0"}}, "beers")
    fractional = normalize_product({"id": "b", "name": "B", "metadata": {"ibu": 12.5}}, "beers")

    assert whole.metadata.beer.ibu == 45
    assert isinstance(whole.metadata.beer.ibu, int)
    assert fractional.metadata.beer.ibu == 12.5


def test_tags_accepted_only_from_lists():
    product = normalize_product({"id": "n", "name": "Nachos", "tags": ["sharing", 3, "spicy"]}, "snacks")

    assert product.metadata.tags == ("sharing", "spicy")


def test_localized_overrides_accept_both_spellings():
    raw = {"id": "s", "name": "Soda", "nameVi": "Nước ngọt", "description_ja": "ソーダ"}

    product = normalize_product(raw, "drinks")

    assert product.localized_name("vi") == "Nước ngọt"
    assert product.localized_name("ko") == "Soda"
    assert product.localized_description("ja") == "ソーダ"


def test_normalizing_twice_is_structurally_equal():
    raw = {
        "id": "w",
        "name": "Wine",
        "prices": [{"size": "Glass", "price": 120}],
        "metadata": {"vintage": {"year": 2020}, "tags": ["red"]},
    }

    assert normalize_product(raw, "wines") == normalize_product(raw, "wines")


def test_raw_metadata_is_not_aliased_to_source():
    raw = {"id": "w", "name": "Wine", "metadata": {"awards": ["gold"]}}

    product = normalize_product(raw, "wines")
    raw["metadata"]["awards"].append("silver")

    assert product.raw_metadata == {"awards": ["gold"]}


@pytest.mark.parametrize("raw", [{"name": "No id"}, {"id": "no-name"}, {"id": " ", "name": "Blank"}])
def test_record_without_id_or_name_is_rejected(raw):
    with pytest.raises(ValueError):
        normalize_product(raw, "snacks")


@pytest.mark.parametrize(
    ("value", "expected"),
    [(5, 5.0), ("4.8", 4.8), (" 12 ", 12.0), ("1e2", 100.0), ("inf", None), ("1_000", None), (None, None), (False, None)],
)
def test_parse_number(value, expected):
    assert parse_number(value) == expected


def test_category_prefers_slug_and_display_order():
    raw = {"id": "uuid-1", "slug": "beers", "name": "Beers", "nameJa": "ビール", "icon": "🍺", "display_order": 3}

    category = normalize_category(raw, 0)

    assert category.id == "beers"
    assert category.order == 3
    assert category.localized_name("ja") == "ビール"
    assert category.localized_name("vi") == "Beers"


def test_category_order_falls_back_to_index():
    category = normalize_category({"id": "snacks", "name": "Snacks", "order": "soon"}, 4)

    assert category.order == 4
    assert category.icon == ""
