"""Rich text helpers for catalog and cart rows."""

from __future__ import annotations

from rich.text import Text

from taproom.formatter import format_price, size_label
from taproom.i18n import Language, translate
from taproom.ledger import line_total
from taproom.models import CartLine, Category, Product
from taproom.pricing import resolve_price, variant_options


def badge_style(kind: str) -> str:
    """Return a consistent badge style for metadata tags."""
    if kind == "beer":
        return "bold #0b1f0f on #e0b341"
    if kind == "wine":
        return "bold #ffffff on #b23a48"
    if kind == "size":
        return "bold #ffffff on #2f6db5"
    return "bold #0b1f0f on #5fbf72"


def metadata_badges(product: Product) -> list[tuple[str, str]]:
    """Return ``(kind, label)`` badges for a product's structured metadata."""
    badges: list[tuple[str, str]] = []
    meta = product.metadata
    if meta is not None and meta.beer is not None:
        if meta.beer.ibu is not None:
            badges.append(("beer", f"IBU {meta.beer.ibu:g}"))
        if meta.beer.abv is not None:
            badges.append(("beer", f"ABV {meta.beer.abv:g}%"))
    if meta is not None and meta.wine is not None:
        for value in (meta.wine.country, meta.wine.region, meta.wine.grape_variety, meta.wine.style):
            if value:
                badges.append(("wine", value))
    if meta is not None and meta.tags:
        badges.extend(("tag", tag) for tag in meta.tags)
    return badges


def subcategory_heading(subcategory: str | None, language: Language) -> str:
    """Heading for a subcategory group; unlabelled products go under "Other"."""
    return (subcategory or translate(language, "other")).upper()


def format_category_tabs(categories: tuple[Category, ...], selected: str | None, language: Language) -> Text:
    text = Text()
    for idx, category in enumerate(categories):
        if idx > 0:
            text.append("  ")
        label = f"{category.icon} {category.localized_name(language)}".strip()
        if category.id == selected:
            text.append(f"[{label}]", style="bold reverse")
        else:
            text.append(f" {label} ")
    return text


def format_product_row(product: Product, language: Language) -> Text:
    """Render name, prices, badges and description for one product."""
    text = Text()
    text.append(product.name, style="bold")

    options = variant_options(product)
    if options:
        prices = " / ".join(f"{size_label(size)} {format_price(price)}" for size, price in options)
        text.append(f"  {prices}")
    else:
        text.append(f"  {format_price(product.price)}")

    badges = metadata_badges(product)
    if badges:
        text.append("\n    ")
        for idx, (kind, label) in enumerate(badges):
            if idx > 0:
                text.append(" ")
            text.append(f" {label} ", style=badge_style(kind))

    description = product.localized_description(language)
    if description:
        text.append(f"\n    {description}", style="dim")

    for key, value in product.raw_metadata.items():
        text.append(f"\n    {key}: {value}", style="dim italic")
    return text


def format_cart_line(line: CartLine) -> Text:
    text = Text()
    text.append(line.product.name)
    if line.selected_variant:
        text.append(" ")
        text.append(f" {size_label(line.selected_variant)} ", style=badge_style("size"))
    unit_price = resolve_price(line.product, line.selected_variant)
    text.append(f"\n      {line.quantity} × {format_price(unit_price)} = {format_price(line_total(line))}", style="dim")
    return text
