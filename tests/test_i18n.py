from __future__ import annotations

import pytest

from taproom.i18n import Language, next_language, resolve_language, translate


@pytest.mark.parametrize(
    ("tag", "expected"),
    [
        ("vi", Language.VI),
        ("JA", Language.JA),
        ("ko-KR", Language.KO),
        ("vi_VN", Language.VI),
        ("fr", Language.EN),
        ("", Language.EN),
        (None, Language.EN),
        (42, Language.EN),
        (Language.KO, Language.KO),
    ],
)
def test_resolve_language(tag, expected):
    assert resolve_language(tag) is expected


def test_translate_falls_back_to_english_then_key():
    assert translate("ko", "total") == "총 결제금액"
    assert translate("xx", "notes") == "Notes"
    assert translate("vi", "missing-key") == "missing-key"


def test_next_language_cycles_all_languages():
    seen = [Language.EN]
    for _ in range(4):
        seen.append(next_language(seen[-1]))

    assert seen == [Language.EN, Language.VI, Language.JA, Language.KO, Language.EN]
