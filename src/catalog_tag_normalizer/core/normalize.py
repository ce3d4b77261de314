"""タグ正規化（生タグ → 正規キー）.

ユーザーが入力した生タグを、グルーピング用の正規キー（小文字・エイリアス解決済み）に変換します。
正規キーは表示には使わず、重複検出・代表表記の選択のためだけに使います。

設計方針:
    - 全域関数（どんな入力でも例外を出さない。空/空白/None は空文字）
    - エイリアス辞書は引数で受け取る（省略時は DEFAULT_ALIASES）
    - 先頭トークン一致は辞書側で明示された正規キーのみ（既定では無効）
"""

from __future__ import annotations

import re

from .aliases import DEFAULT_ALIASES, AliasDictionary
from .text import sanitize

_TOKEN_DELIMITER = re.compile(r"[\s\-&()]+")


def _first_token(text: str) -> str:
    for token in _TOKEN_DELIMITER.split(text):
        if token:
            return token
    return ""


def normalize(raw: object, aliases: AliasDictionary | None = None) -> str:
    """生タグを正規キーに変換する.

    Args:
        raw: 生タグ（None や非文字列は空入力として扱う）
        aliases: エイリアス辞書（省略時は DEFAULT_ALIASES）

    Returns:
        正規キー。空入力・記号のみの入力は空文字

    Examples:
        >>> normalize("  TURKEY  ")
        'turkey'
        >>> normalize("Turkish")
        'turkey'
        >>> normalize("Hot & Spicy")
        'hot & spicy'
        >>> normalize(None)
        ''
    """
    sanitized = sanitize(raw)
    if not sanitized:
        return ""

    if aliases is None:
        aliases = DEFAULT_ALIASES

    canonical = aliases.lookup(sanitized)
    if canonical is not None:
        return canonical

    # 複合語（"turkey-product" 等）は prefix_keys に登録された正規キーのみ先頭トークンで寄せる
    token = _first_token(sanitized)
    if token and token != sanitized:
        canonical = aliases.lookup_prefix(token)
        if canonical is not None:
            return canonical

    return sanitized
