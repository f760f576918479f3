"""Editable sample menu, used when no exported catalog file is configured.

Items deliberately mix the upstream record generations: legacy fixed beer
sizes, ``prices`` lists, and flat database rows with pass-through metadata.
"""

from __future__ import annotations

from typing import Any

SAMPLE_CATEGORIES: list[dict[str, Any]] = [
    {"id": "c-beers", "slug": "beers", "name": "Beers", "nameVi": "Bia", "nameJa": "ビール", "nameKo": "맥주", "icon": "🍺", "display_order": 1},
    {"id": "c-wines", "slug": "wines", "name": "Wines", "nameVi": "Rượu vang", "nameJa": "ワイン", "nameKo": "와인", "icon": "🍷", "display_order": 2},
    {"id": "c-drinks", "slug": "drinks", "name": "Drinks", "nameVi": "Đồ uống", "nameJa": "ドリンク", "nameKo": "음료", "icon": "🥤", "display_order": 3},
    {"id": "c-snacks", "slug": "snacks", "name": "Snacks", "nameVi": "Đồ ăn vặt", "nameJa": "スナック", "nameKo": "스낵", "icon": "🍟", "display_order": 4},
]

SAMPLE_ITEMS: list[dict[str, Any]] = [
    # Legacy generation: fixed two-size pricing inside metadata.beer.
    {
        "id": "beer-hazy-ipa",
        "name": "Hazy IPA",
        "description": "Juicy, soft bitterness, tropical hop aroma.",
        "descriptionVi": "Mọng nước, đắng nhẹ, hương hoa bia nhiệt đới.",
        "price": 65,
        "category": "beers",
        "subcategory": "IPA",
        "metadata": {"beer": {"ibu": 35, "abv": 6.5, "size033ml": 65, "size050ml": 90}},
    },
    # Size list generation.
    {
        "id": "beer-pilsner",
        "name": "Saigon Pilsner",
        "description": "Crisp and clean lager.",
        "category": "beers",
        "subcategory": "Lager",
        "prices": [
            {"id": "p-pils-050", "size": "0.50", "price": 70},
            {"id": "p-pils-033", "size": "0.33", "price": 50},
        ],
        "metadata": {"beer": {"ibu": "22", "abv": "4.8"}, "tags": ["local", "light"]},
    },
    # Database row generation: flat columns plus pass-through metadata.
    {
        "id": "beer-stout",
        "name": "Coffee Stout",
        "description": "Roasty stout brewed with Dalat coffee.",
        "category_id": "c-beers",
        "subcategory": "Dark",
        "ibu": 40,
        "abv": "7.2",
        "display_order": 3,
        "is_disabled": False,
        "price_per_size": [
            {"id": "p-stout-033", "size": "0.33", "price": 75},
            {"id": "p-stout-050", "size": "0.50", "price": 105},
        ],
        "metadata": {"brewery": "Heart of Darkness", "serving_temp": "10°C"},
    },
    {
        "id": "wine-malbec",
        "name": "Malbec Reserva",
        "description": "Plum, cocoa and soft tannins.",
        "category_id": "c-wines",
        "subcategory": "Red",
        "wine_region": "Mendoza",
        "wine_country": "Argentina",
        "wine_style": "Full-bodied",
        "prices": [
            {"id": "p-malbec-glass", "size": "Glass", "price": 120},
            {"id": "p-malbec-bottle", "size": "Bottle", "price": 650},
        ],
        "metadata": {"grapeVariety": "Malbec", "vintage": 2020},
    },
    {
        "id": "wine-sauvignon",
        "name": "Sauvignon Blanc",
        "description": "Citrus and cut grass.",
        "category": "wines",
        "subcategory": "White",
        "price": 110,
        "metadata": {"wine": {"region": "Marlborough", "country": "New Zealand", "grapeVariety": "Sauvignon Blanc"}},
    },
    {
        "id": "drink-lime-soda",
        "name": "Lime Soda",
        "description": "Fresh lime, soda water.",
        "descriptionVi": "Chanh tươi, nước soda.",
        "category": "drinks",
        "price": 35,
    },
    {
        "id": "drink-kombucha",
        "name": "House Kombucha",
        "description": "Seasonal flavour, ask the staff.",
        "category_id": "c-drinks",
        "price": "45",
        "is_disabled": True,
    },
    {
        "id": "snack-fries",
        "name": "Truffle Fries",
        "description": "Hand-cut fries, truffle salt.",
        "descriptionJa": "トリュフ塩のフライドポテト。",
        "category": "snacks",
        "price": 50,
    },
    {
        "id": "snack-nachos",
        "name": "Loaded Nachos",
        "description": "Cheese, jalapeño, pico de gallo.",
        "category": "snacks",
        "price": 85,
        "tags": ["sharing", "spicy"],
    },
]
