"""タグ入力の解析と保存前クリーニング.

HTTPリクエスト・一括インポート・既存の保存データなど、どんな形で届いたタグでも
「前後空白を除いた文字列のフラットなリスト」に揃えます。

設計方針:
    - 例外は出さない（壊れたJSONっぽい文字列はそのまま文字列として扱う）
    - 二重JSONエンコード（`["Turkey"]` という4文字がタグとして保存されている等）は
      MAX_UNWRAP_DEPTH 段まで再帰的に剥がす。超えた場合は元の文字列をそのまま残す
    - clean_tags_for_storage は冪等（2回かけても結果が変わらない）
"""

from __future__ import annotations

import json
from collections.abc import Iterable

from loguru import logger

from .aliases import AliasDictionary
from .cluster import normalize_tags

MAX_UNWRAP_DEPTH = 5


def _coerce_text(value: object) -> str | None:
    """タグ要素を文字列に寄せる（None は None のまま＝捨てる）."""
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple, dict)):
        # 入れ子の配列は JSON 文字列にしておき、clean 側で剥がす
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def _strip_all(values: Iterable[object]) -> list[str]:
    tags: list[str] = []
    for value in values:
        text = _coerce_text(value)
        if text is None:
            continue
        text = text.strip()
        if text:
            tags.append(text)
    return tags


def _split_comma(text: str) -> list[str]:
    return _strip_all(text.split(","))


def parse_tags_from_input(value: object) -> list[str]:
    """さまざまな入力形式からタグのリストを得る.

    対応する形式:
    - None / 空文字 → []
    - カンマ区切り文字列（"Turkey, Spices"）
    - JSON配列文字列（'["Turkey", "Spices"]'）
    - 配列（list / tuple。数値・真偽値は文字列化）

    Args:
        value: 入力値

    Returns:
        前後空白除去済み・空要素なしのタグ一覧

    Examples:
        >>> parse_tags_from_input('["Turkey"]')
        ['Turkey']
        >>> parse_tags_from_input(" Turkey ,  Spices  , Fresh ")
        ['Turkey', 'Spices', 'Fresh']
    """
    if value is None:
        return []

    if isinstance(value, (list, tuple)):
        return _strip_all(value)

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return []
        if text.startswith("["):
            try:
                parsed = json.loads(text)
            except (json.JSONDecodeError, RecursionError):
                # 極端に深い入れ子は json 側で再帰上限に達するため、文字列として扱う
                parsed = None
            if isinstance(parsed, list):
                return _strip_all(parsed)
        return _split_comma(text)

    # 契約外の型でも書き込みを止めないため、文字列化して続行する
    logger.warning(f"Unexpected tag input type {type(value).__name__}; coercing to string")
    return _split_comma(str(value))


def _looks_encoded(text: str) -> bool:
    if len(text) < 2:
        return False
    return (text[0] == "[" and text[-1] == "]") or (text[0] == '"' and text[-1] == '"')


def _unwrap(text: str, depth: int) -> list[str] | None:
    """JSONエンコードされたタグを剥がす（深さ超過なら None）."""
    s = text.strip()
    if not s:
        return []
    if not _looks_encoded(s):
        return [s]
    if depth >= MAX_UNWRAP_DEPTH:
        return None

    try:
        parsed = json.loads(s)
    except (json.JSONDecodeError, RecursionError):
        return [s]

    if isinstance(parsed, str):
        return _unwrap(parsed, depth + 1)

    if isinstance(parsed, list):
        tags: list[str] = []
        for item in parsed:
            item_text = _coerce_text(item)
            if item_text is None:
                continue
            unwrapped = _unwrap(item_text, depth + 1)
            if unwrapped is None:
                return None
            tags.extend(unwrapped)
        return tags

    return [s]


def clean_tags_for_storage(tags: object) -> list[str]:
    r"""保存前にタグ一覧をクリーニングする.

    - 二重エンコードされた要素（'["Turkey"]', '["[\\"turkey\\"]"]' など）を剥がして展開
    - 前後空白を除去し、空要素を捨てる
    - 非文字列の要素は文字列化
    - 順序は保持（重複除去・正規化はしない。必要なら normalize_tags を併用）

    Args:
        tags: タグ一覧（文字列が来た場合は parse_tags_from_input で解析してから処理）

    Returns:
        クリーニング済みタグ一覧

    Examples:
        >>> clean_tags_for_storage(['["[\\"turkey\\"]"]'])
        ['turkey']
    """
    if tags is None:
        return []
    if isinstance(tags, str):
        tags = parse_tags_from_input(tags)
    elif not isinstance(tags, (list, tuple)):
        logger.warning(f"Unexpected tag list type {type(tags).__name__}; coercing to string")
        tags = parse_tags_from_input(str(tags))

    cleaned: list[str] = []
    for item in tags:
        text = _coerce_text(item)
        if text is None:
            continue
        unwrapped = _unwrap(text, 0)
        if unwrapped is None:
            # 深さ超過は元の文字列をそのまま残す（冪等性のため途中まで剥がした値は使わない）
            literal = text.strip()
            if literal:
                cleaned.append(literal)
            continue
        cleaned.extend(unwrapped)
    return cleaned


def has_encoding_artifact(tag: object) -> bool:
    """タグが二重エンコードの痕跡（剥がせるJSON）を持つか判定する."""
    if not isinstance(tag, str):
        return False
    s = tag.strip()
    return _looks_encoded(s) and clean_tags_for_storage([s]) != [s]


def format_tags_for_display(tags: Iterable[object] | None) -> str:
    """タグ一覧を表示用の文字列（", " 区切り）にする.

    Examples:
        >>> format_tags_for_display(["Turkey", "", "Spices"])
        'Turkey, Spices'
    """
    if tags is None or isinstance(tags, (str, bytes)):
        return ""
    return ", ".join(_strip_all(tags))


def prepare_tags_for_storage(value: object, aliases: AliasDictionary | None = None) -> list[str]:
    """カタログ書き込み用: 解析 → クリーニング → 正規化・重複除去 を一度に行う."""
    return normalize_tags(clean_tags_for_storage(parse_tags_from_input(value)), aliases)
