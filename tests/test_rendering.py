from __future__ import annotations

from taproom.models import CartLine, Product, ProductMetadata, WineMetadata
from taproom.rendering import format_cart_line, format_product_row, metadata_badges, subcategory_heading


def test_metadata_badges(pilsner):
    wine = Product(
        id="w",
        name="Malbec",
        category="wines",
        metadata=ProductMetadata(wine=WineMetadata(region="Mendoza", country="Argentina"), tags=("red",)),
    )

    assert metadata_badges(pilsner) == [("beer", "IBU 20"), ("beer", "ABV 4.8%")]
    assert metadata_badges(wine) == [("wine", "Argentina"), ("wine", "Mendoza"), ("tag", "red")]


def test_product_row_lists_sizes_and_passthrough_metadata(legacy_ipa):
    product = Product(
        id=legacy_ipa.id,
        name=legacy_ipa.name,
        category="beers",
        price=legacy_ipa.price,
        description="Hoppy",
        description_vi="Nhiều hoa bia",
        metadata=legacy_ipa.metadata,
        raw_metadata={"brewery": "Pasteur Street"},
    )

    plain = format_product_row(product, "vi").plain

    assert "0.33L 60,000 VND / 0.50L 85,000 VND" in plain
    assert "Nhiều hoa bia" in plain
    assert "brewery: Pasteur Street" in plain


def test_cart_line_shows_size_and_line_total(pilsner):
    plain = format_cart_line(CartLine(pilsner, 2, "0.50")).plain

    assert plain.startswith("Pilsner  0.50L ")
    assert "2 × 35,000 VND = 70,000 VND" in plain


def test_subcategory_heading_names_unlabelled_group():
    assert subcategory_heading("Sour", "en") == "SOUR"
    assert subcategory_heading(None, "en") == "OTHER"
    assert subcategory_heading(None, "vi") == "KHÁC"
