"""Domain models for taproom-order."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from taproom.i18n import Language, resolve_language


@dataclass(frozen=True)
class BeerMetadata:
    """Beer attributes, including the legacy fixed 0.33 / 0.50 price pair."""

    ibu: int | float | None = None
    abv: float | None = None
    size_033: float | None = None
    size_050: float | None = None


@dataclass(frozen=True)
class WineMetadata:
    region: str = ""
    country: str = ""
    grape_variety: str | None = None
    style: str | None = None


@dataclass(frozen=True)
class ProductMetadata:
    beer: BeerMetadata | None = None
    wine: WineMetadata | None = None
    tags: tuple[str, ...] | None = None


@dataclass(frozen=True)
class VariantPrice:
    """A purchasable size of a product with its own price."""

    id: str
    size: str
    price: float


@dataclass(frozen=True)
class Product:
    """Canonical catalog entry, independent of the upstream record shape."""

    id: str
    name: str
    category: str
    price: float = 0.0
    description: str = ""
    name_vi: str | None = None
    name_ja: str | None = None
    name_ko: str | None = None
    description_vi: str | None = None
    description_ja: str | None = None
    description_ko: str | None = None
    subcategory: str | None = None
    metadata: ProductMetadata | None = None
    variant_prices: tuple[VariantPrice, ...] = ()
    raw_metadata: dict[str, Any] = field(default_factory=dict, hash=False)

    @property
    def has_variants(self) -> bool:
        return bool(self.variant_prices)

    def localized_name(self, language: str | Language | None) -> str:
        return _pick_localized(self.name, language, self.name_vi, self.name_ja, self.name_ko)

    def localized_description(self, language: str | Language | None) -> str:
        return _pick_localized(
            self.description, language, self.description_vi, self.description_ja, self.description_ko
        )


@dataclass(frozen=True)
class Category:
    """A catalog section such as beers or snacks."""

    id: str
    name: str
    icon: str = ""
    order: int = 0
    name_vi: str | None = None
    name_ja: str | None = None
    name_ko: str | None = None

    def localized_name(self, language: str | Language | None) -> str:
        return _pick_localized(self.name, language, self.name_vi, self.name_ja, self.name_ko)

    def sort_key(self) -> tuple[int, str]:
        return (self.order, self.id)


@dataclass(frozen=True)
class CartLine:
    """One product/variant row of the cart."""

    product: Product
    quantity: int
    selected_variant: str | None = None

    @property
    def key(self) -> tuple[str, str | None]:
        return (self.product.id, self.selected_variant)


@dataclass(frozen=True)
class Cart:
    """Ordered cart lines plus free-text order notes."""

    lines: tuple[CartLine, ...] = ()
    notes: str = ""


def _pick_localized(
    base: str,
    language: str | Language | None,
    vi: str | None,
    ja: str | None,
    ko: str | None,
) -> str:
    overrides = {Language.VI: vi, Language.JA: ja, Language.KO: ko}
    return overrides.get(resolve_language(language)) or base
