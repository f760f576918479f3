"""Supported languages and the strings the order message and UI need."""

from __future__ import annotations

from enum import Enum


class Language(str, Enum):
    """Language tags a patron can pick."""

    EN = "en"
    VI = "vi"
    JA = "ja"
    KO = "ko"


BASE_LANGUAGE = Language.EN

TRANSLATIONS: dict[Language, dict[str, str]] = {
    Language.EN: {
        "app_title": "81 Taproom",
        "new_order": "New Order from Taproom Menu",
        "total": "Total",
        "notes": "Notes",
        "your_cart": "Your Cart",
        "empty_cart": "Your cart is empty",
        "order_notes": "Order notes",
        "order_notes_placeholder": "Any special requests?",
        "send_order": "Send order",
        "items_in_cart": "items in cart",
        "select_size": "Select size",
        "search": "Search",
        "no_results": "No results",
        "menu_unavailable": "Menu not available",
        "other": "Other",
    },
    Language.VI: {
        "app_title": "81 Taproom",
        "new_order": "Đơn hàng mới từ Taproom",
        "total": "Tổng cộng",
        "notes": "Ghi chú",
        "your_cart": "Giỏ hàng",
        "empty_cart": "Giỏ hàng trống",
        "order_notes": "Ghi chú đơn hàng",
        "order_notes_placeholder": "Yêu cầu đặc biệt?",
        "send_order": "Gửi đơn hàng",
        "items_in_cart": "món trong giỏ",
        "select_size": "Chọn cỡ",
        "search": "Tìm kiếm",
        "no_results": "Không có kết quả",
        "menu_unavailable": "Thực đơn chưa sẵn sàng",
        "other": "Khác",
    },
    Language.JA: {
        "app_title": "81 Taproom",
        "new_order": "Taproomからの新しい注文",
        "total": "合計",
        "notes": "メモ",
        "your_cart": "カート",
        "empty_cart": "カートは空です",
        "order_notes": "注文メモ",
        "order_notes_placeholder": "特別なご要望は？",
        "send_order": "注文を送信",
        "items_in_cart": "点",
        "select_size": "サイズを選択",
        "search": "検索",
        "no_results": "結果がありません",
        "menu_unavailable": "メニューを利用できません",
        "other": "その他",
    },
    Language.KO: {
        "app_title": "81 Taproom",
        "new_order": "Taproom 주문",
        "total": "총 결제금액",
        "notes": "요청사항",
        "your_cart": "장바구니",
        "empty_cart": "장바구니가 비어 있습니다",
        "order_notes": "주문 요청사항",
        "order_notes_placeholder": "특별한 요청이 있으신가요?",
        "send_order": "주문 보내기",
        "items_in_cart": "개 담김",
        "select_size": "사이즈 선택",
        "search": "검색",
        "no_results": "결과 없음",
        "menu_unavailable": "메뉴를 사용할 수 없습니다",
        "other": "기타",
    },
}


def resolve_language(tag: str | Language | None) -> Language:
    """Map a language tag such as ``"vi"`` or ``"ja-JP"`` to a supported language.

    Unknown, empty or malformed tags resolve to the base language.
    """
    if isinstance(tag, Language):
        return tag
    if not isinstance(tag, str):
        return BASE_LANGUAGE
    primary = tag.strip().lower().replace("_", "-").split("-", 1)[0]
    try:
        return Language(primary)
    except ValueError:
        return BASE_LANGUAGE


def translate(language: str | Language | None, key: str) -> str:
    """Return the string for ``key``, falling back to English, then to the key."""
    lang = resolve_language(language)
    table = TRANSLATIONS.get(lang, {})
    if key in table:
        return table[key]
    return TRANSLATIONS[BASE_LANGUAGE].get(key, key)


def next_language(language: Language) -> Language:
    members = list(Language)
    return members[(members.index(language) + 1) % len(members)]
