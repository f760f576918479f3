"""Catalog assembly from already-fetched raw category and item records."""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping

from taproom.models import Category, Product
from taproom.normalizer import normalize_category, normalize_product, parse_number, parse_text

logger = logging.getLogger(__name__)


class CatalogUnavailable(RuntimeError):
    """No raw catalog records are available yet."""


@dataclass(frozen=True)
class Catalog:
    """Normalized, ordered categories and products."""

    categories: tuple[Category, ...] = ()
    products: tuple[Product, ...] = ()

    @property
    def is_available(self) -> bool:
        return bool(self.categories) and bool(self.products)

    def category(self, slug: str) -> Category | None:
        for category in self.categories:
            if category.id == slug:
                return category
        return None

    def product(self, product_id: str) -> Product | None:
        for product in self.products:
            if product.id == product_id:
                return product
        return None

    def products_in(self, slug: str) -> list[Product]:
        return [product for product in self.products if product.category == slug]

    def search(self, query: str, slug: str | None = None) -> list[Product]:
        """Case-insensitive match on names, description and subcategory."""
        source = self.products_in(slug) if slug is not None else list(self.products)
        needle = query.strip().lower()
        if not needle:
            return source
        return [product for product in source if _matches(product, needle)]


def _matches(product: Product, needle: str) -> bool:
    haystacks = (
        product.name,
        product.name_vi,
        product.name_ja,
        product.name_ko,
        product.description,
        product.subcategory,
    )
    return any(text and needle in text.lower() for text in haystacks)


def group_by_subcategory(products: Iterable[Product]) -> list[tuple[str | None, list[Product]]]:
    """Group products by subcategory label, keeping first-seen group order."""
    groups: dict[str | None, list[Product]] = {}
    for product in products:
        groups.setdefault(product.subcategory, []).append(product)
    return list(groups.items())


def load_raw_catalog(path: str | Path) -> tuple[list[Any], list[Any]]:
    """Read ``{"categories": [...], "items": [...]}`` exported from the data provider."""
    catalog_file = Path(path)
    try:
        data = json.loads(catalog_file.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise CatalogUnavailable(f"Catalog file not found: {catalog_file}") from exc
    except (OSError, ValueError) as exc:
        raise CatalogUnavailable(f"Catalog file unreadable: {catalog_file}: {exc}") from exc

    if not isinstance(data, dict):
        raise CatalogUnavailable(f"Catalog file has no categories/items object: {catalog_file}")

    categories = data.get("categories")
    items = data.get("items")
    if items is None:
        items = data.get("menu_items")
    return (
        categories if isinstance(categories, list) else [],
        items if isinstance(items, list) else [],
    )


def _category_slug(raw: Mapping[str, Any], aliases: Mapping[str, str]) -> str | None:
    candidates: list[Any] = [raw.get("category_id")]
    nested = raw.get("category")
    if isinstance(nested, Mapping):
        candidates.extend([nested.get("slug"), nested.get("id")])
    else:
        candidates.append(nested)

    for candidate in candidates:
        key = parse_text(candidate)
        if key is not None and key in aliases:
            return aliases[key]
    return None


def build_catalog(raw_categories: Iterable[Any], raw_items: Iterable[Any]) -> Catalog:
    """Normalize raw records into a :class:`Catalog`.

    Items that are disabled, lack an id or name, or point at an unknown
    category are skipped and logged.
    """
    categories: list[Category] = []
    aliases: dict[str, str] = {}
    for idx, raw in enumerate(raw_categories):
        if not isinstance(raw, Mapping):
            continue
        try:
            category = normalize_category(raw, idx)
        except ValueError as exc:
            logger.warning("skipping category #%d: %s", idx, exc)
            continue
        if category.id in aliases:
            logger.warning("skipping duplicate category %s", category.id)
            continue
        categories.append(category)
        aliases[category.id] = category.id
        upstream_id = parse_text(raw.get("id"))
        if upstream_id is not None:
            aliases.setdefault(upstream_id, category.id)
    categories.sort(key=Category.sort_key)

    ordered: list[tuple[tuple[float, int], Product]] = []
    seen_ids: set[str] = set()
    for position, raw in enumerate(raw_items):
        if not isinstance(raw, Mapping):
            continue
        if raw.get("is_disabled") is True:
            continue
        slug = _category_slug(raw, aliases)
        if slug is None:
            logger.warning("skipping item %r: unknown category", raw.get("id"))
            continue
        try:
            product = normalize_product(raw, slug)
        except ValueError as exc:
            logger.warning("skipping item #%d: %s", position, exc)
            continue
        if product.id in seen_ids:
            logger.warning("skipping duplicate item %s", product.id)
            continue
        seen_ids.add(product.id)
        display_order = parse_number(raw.get("display_order"))
        ordered.append(((display_order if display_order is not None else math.inf, position), product))

    ordered.sort(key=lambda pair: pair[0])
    products = tuple(product for _, product in ordered)
    logger.info("catalog built categories=%d products=%d", len(categories), len(products))
    return Catalog(categories=tuple(categories), products=products)
