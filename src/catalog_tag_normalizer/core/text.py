"""タグ文字列の整形（正規化とエイリアス辞書で共有）."""

from __future__ import annotations

import re
import unicodedata

# 文字・数字・空白・ハイフン・&・括弧以外を除去する（\w に含まれる _ は別途除去）
_DISALLOWED_CHARS = re.compile(r"[^\w\s\-&()]|_")
_WHITESPACE_RUN = re.compile(r"\s+")


def sanitize(raw: object) -> str:
    """生タグを小文字化・記号除去した文字列に整形する（エイリアス解決なし）.

    Examples:
        >>> sanitize("Turkey (Fresh)")
        'turkey (fresh)'
        >>> sanitize("Turkey@#$")
        'turkey'
        >>> sanitize("   ")
        ''
    """
    if not isinstance(raw, str):
        return ""

    s = raw.strip()
    if not s:
        return ""

    # NOTE:
    # - 全角英数・全角括弧などが混ざるケースがあるため NFKC で半角へ寄せる
    # - アクセント付き文字は合成済み形に揃うだけで残る（"Café" -> "café"）
    s = unicodedata.normalize("NFKC", s)
    s = s.lower()
    s = _WHITESPACE_RUN.sub(" ", s)
    s = _DISALLOWED_CHARS.sub("", s)
    return _WHITESPACE_RUN.sub(" ", s).strip()
