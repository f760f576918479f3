"""Normalize upstream catalog records into canonical products and categories.

Upstream records come in three generations:

1. legacy items with fixed 0.33 / 0.50 beer prices inside ``metadata.beer``;
2. items carrying an arbitrary ``prices`` (or ``price_per_size``) list;
3. database rows with flat columns (``ibu``, ``wine_region`` ...) plus a
   free-form ``metadata`` mapping that is passed through for display.

Each derived field is read from an explicit precedence table below; the first
source that yields a usable value wins. Malformed values are treated as absent.
"""

from __future__ import annotations

import copy
import logging
import math
from typing import Any, Callable, Mapping

from taproom.models import (
    BeerMetadata,
    Category,
    Product,
    ProductMetadata,
    VariantPrice,
    WineMetadata,
)

logger = logging.getLogger(__name__)

Path = tuple[str, ...]

VARIANT_LIST_SOURCES: tuple[Path, ...] = (("prices",), ("price_per_size",))
FLAT_PRICE_SOURCES: tuple[Path, ...] = (("price",),)

IBU_SOURCES: tuple[Path, ...] = (("metadata", "beer", "ibu"), ("metadata", "ibu"), ("ibu",))
ABV_SOURCES: tuple[Path, ...] = (("metadata", "beer", "abv"), ("metadata", "abv"), ("abv",))
LEGACY_033_SOURCES: tuple[Path, ...] = (("metadata", "beer", "size033ml"),)
LEGACY_050_SOURCES: tuple[Path, ...] = (("metadata", "beer", "size050ml"),)

REGION_SOURCES: tuple[Path, ...] = (
    ("metadata", "wine", "region"),
    ("metadata", "region"),
    ("metadata", "wine_region"),
    ("wine_region",),
)
COUNTRY_SOURCES: tuple[Path, ...] = (
    ("metadata", "wine", "country"),
    ("metadata", "country"),
    ("metadata", "wine_country"),
    ("wine_country",),
)
GRAPE_SOURCES: tuple[Path, ...] = (
    ("metadata", "wine", "grapeVariety"),
    ("metadata", "wine", "grape_variety"),
    ("metadata", "grapeVariety"),
    ("metadata", "grape_variety"),
    ("metadata", "wine_grape_variety"),
    ("wine_grape_variety",),
)
STYLE_SOURCES: tuple[Path, ...] = (
    ("metadata", "wine", "style"),
    ("metadata", "style"),
    ("metadata", "wine_style"),
    ("wine_style",),
)
TAGS_SOURCES: tuple[Path, ...] = (("metadata", "tags"), ("tags",))

CATEGORY_ID_SOURCES: tuple[Path, ...] = (("slug",), ("id",))
CATEGORY_ORDER_SOURCES: tuple[Path, ...] = (("display_order",), ("order",))

# Metadata keys already projected into ProductMetadata, under every synonym.
RAW_METADATA_EXCLUDED_KEYS = frozenset(
    {
        "beer",
        "wine",
        "tags",
        "ibu",
        "abv",
        "size033ml",
        "size050ml",
        "region",
        "wine_region",
        "country",
        "wine_country",
        "grapeVariety",
        "grape_variety",
        "wine_grape_variety",
        "style",
        "wine_style",
    }
)

_LANGUAGE_SUFFIXES = (("vi", "Vi"), ("ja", "Ja"), ("ko", "Ko"))


def parse_number(value: Any) -> float | None:
    """Return ``value`` as a finite float, or ``None`` if it does not parse."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text or "_" in text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def parse_non_negative(value: Any) -> float | None:
    number = parse_number(value)
    if number is None or number < 0:
        return None
    return number


def parse_text(value: Any) -> str | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        value = str(value)
    if not isinstance(value, str):
        return None
    text = value.strip()
    return text or None


def parse_tags(value: Any) -> tuple[str, ...] | None:
    if not isinstance(value, list):
        return None
    return tuple(tag for tag in value if isinstance(tag, str))


def _lookup(raw: Mapping[str, Any], path: Path) -> Any:
    node: Any = raw
    for key in path:
        if not isinstance(node, Mapping) or key not in node:
            return None
        node = node[key]
    return node


def first_of(raw: Mapping[str, Any], sources: tuple[Path, ...], parse: Callable[[Any], Any]) -> Any:
    """Walk ``sources`` in order and return the first value ``parse`` accepts."""
    for path in sources:
        parsed = parse(_lookup(raw, path))
        if parsed is not None:
            return parsed
    return None


def _variant_prices(raw: Mapping[str, Any], product_id: str) -> tuple[VariantPrice, ...]:
    # First list that yields a usable variant wins.
    for path in VARIANT_LIST_SOURCES:
        candidate = _lookup(raw, path)
        if isinstance(candidate, list):
            variants = _parse_variant_list(candidate, product_id)
            if variants:
                return variants
    return ()


def _parse_variant_list(entries: list[Any], product_id: str) -> tuple[VariantPrice, ...]:
    variants: list[VariantPrice] = []
    seen_sizes: set[str] = set()
    for entry in entries:
        if not isinstance(entry, Mapping):
            continue
        size = parse_text(entry.get("size"))
        price = parse_non_negative(entry.get("price"))
        if size is None or price is None:
            logger.debug("dropping variant of %s: size=%r price=%r", product_id, entry.get("size"), entry.get("price"))
            continue
        if size in seen_sizes:
            logger.debug("dropping duplicate size %r of %s", size, product_id)
            continue
        seen_sizes.add(size)
        variant_id = parse_text(entry.get("id")) or f"{product_id}:{size}"
        variants.append(VariantPrice(id=variant_id, size=size, price=price))

    # sorted() is stable, equal prices keep their source order.
    return tuple(sorted(variants, key=lambda variant: variant.price))


def _beer_metadata(raw: Mapping[str, Any]) -> BeerMetadata | None:
    ibu = first_of(raw, IBU_SOURCES, parse_non_negative)
    if ibu is not None and float(ibu).is_integer():
        ibu = int(ibu)
    beer = BeerMetadata(
        ibu=ibu,
        abv=first_of(raw, ABV_SOURCES, parse_non_negative),
        size_033=first_of(raw, LEGACY_033_SOURCES, parse_non_negative),
        size_050=first_of(raw, LEGACY_050_SOURCES, parse_non_negative),
    )
    if beer == BeerMetadata():
        return None
    return beer


def _wine_metadata(raw: Mapping[str, Any]) -> WineMetadata | None:
    region = first_of(raw, REGION_SOURCES, parse_text)
    country = first_of(raw, COUNTRY_SOURCES, parse_text)
    grape_variety = first_of(raw, GRAPE_SOURCES, parse_text)
    style = first_of(raw, STYLE_SOURCES, parse_text)
    if region is None and country is None and grape_variety is None and style is None:
        return None
    return WineMetadata(
        region=region or "",
        country=country or "",
        grape_variety=grape_variety,
        style=style,
    )


def _raw_metadata(raw: Mapping[str, Any]) -> dict[str, Any]:
    source = raw.get("metadata")
    if not isinstance(source, Mapping):
        return {}
    return {
        str(key): copy.deepcopy(value)
        for key, value in source.items()
        if key not in RAW_METADATA_EXCLUDED_KEYS
    }


def _localized(raw: Mapping[str, Any], base_key: str) -> dict[str, str | None]:
    overrides: dict[str, str | None] = {}
    for lang, camel in _LANGUAGE_SUFFIXES:
        sources: tuple[Path, ...] = ((f"{base_key}{camel}",), (f"{base_key}_{lang}",))
        overrides[f"{base_key}_{lang}"] = first_of(raw, sources, parse_text)
    return overrides


def _require_text(raw: Mapping[str, Any], key: str) -> str:
    value = parse_text(raw.get(key)) if isinstance(raw, Mapping) else None
    if value is None:
        raise ValueError(f"raw record is missing {key!r}")
    return value


def normalize_product(raw: Mapping[str, Any], category_slug: str) -> Product:
    """Build a canonical :class:`Product` from any supported record generation.

    Raises ``ValueError`` only when the record has no usable ``id`` or ``name``.
    """
    product_id = _require_text(raw, "id")
    name = _require_text(raw, "name")

    variants = _variant_prices(raw, product_id)
    if variants:
        price = variants[0].price
    else:
        price = first_of(raw, FLAT_PRICE_SOURCES, parse_non_negative) or 0.0

    beer = _beer_metadata(raw)
    wine = _wine_metadata(raw)
    tags = first_of(raw, TAGS_SOURCES, parse_tags)
    metadata = None
    if beer is not None or wine is not None or tags is not None:
        metadata = ProductMetadata(beer=beer, wine=wine, tags=tags)

    return Product(
        id=product_id,
        name=name,
        category=category_slug,
        price=price,
        description=parse_text(raw.get("description")) or "",
        subcategory=parse_text(raw.get("subcategory")),
        metadata=metadata,
        variant_prices=variants,
        raw_metadata=_raw_metadata(raw),
        **_localized(raw, "name"),
        **_localized(raw, "description"),
    )


def normalize_category(raw: Mapping[str, Any], index: int) -> Category:
    """Build a :class:`Category`; ``index`` is the fallback sort order."""
    category_id = first_of(raw, CATEGORY_ID_SOURCES, parse_text)
    if category_id is None:
        raise ValueError("raw category is missing 'slug' and 'id'")

    order = first_of(raw, CATEGORY_ORDER_SOURCES, parse_number)
    if order is None or not float(order).is_integer():
        order = index

    return Category(
        id=category_id,
        name=parse_text(raw.get("name")) or category_id,
        icon=parse_text(raw.get("icon")) or "",
        order=int(order),
        **_localized(raw, "name"),
    )
