"""タグのグルーピングと代表表記の選択.

- 正規キーでのグルーピング（出現順を保持）
- 代表表記（表示用）の選択
- 重複除去済みタグ一覧の生成（カタログ書き込み時に使う）
- 表記揺れグループの抽出（オペレーターのレビュー用）
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass

from .aliases import DEFAULT_ALIASES, AliasDictionary
from .normalize import normalize


@dataclass(frozen=True)
class TagGroup:
    """同じ正規キーに寄る生タグのグループ.

    Attributes:
        normalized: 正規キー
        originals: 生タグ（前後空白除去済み、重複なし、初出順）
        suggestion: 代表表記
        count: 出現回数（完全一致の重複も含む）
    """

    normalized: str
    originals: tuple[str, ...]
    suggestion: str
    count: int

    def as_dict(self) -> dict[str, object]:
        return {
            "normalized": self.normalized,
            "originals": list(self.originals),
            "suggestion": self.suggestion,
        }


def _iter_raw_tags(raws: Iterable[object] | None) -> Iterator[str]:
    # 文字列そのもの（1文字ずつ回ってしまう）や None はタグ列として扱わない
    if raws is None or isinstance(raws, (str, bytes)):
        return
    for raw in raws:
        if isinstance(raw, str):
            yield raw


def select_best_representative(tags: Sequence[str]) -> str:
    """グループの代表表記を選ぶ.

    方針（ヒューリスティック。差し替える場合はこの関数だけを変更する）:
    - 各単語が大文字始まりの表記（Title Case。例: "Mr Chef"）があれば、その初出を採用
    - 無ければ初出の表記を採用

    Args:
        tags: 同じ正規キーに寄る表記の一覧（初出順）

    Returns:
        代表表記（空の一覧なら空文字）

    Examples:
        >>> select_best_representative(["turkey", "Turkey", "TURKEY"])
        'Turkey'
        >>> select_best_representative(["mrchef", "MR CHEF"])
        'mrchef'
    """
    for tag in tags:
        if tag.istitle():
            return tag
    return tags[0] if tags else ""


def cluster(raws: Iterable[object] | None, aliases: AliasDictionary | None = None) -> list[TagGroup]:
    """生タグを正規キーでグルーピングする.

    正規キーが空になるタグ（空文字・空白・記号のみ）は捨てます。

    Args:
        raws: 生タグの列（非文字列の要素は無視）
        aliases: エイリアス辞書（省略時は DEFAULT_ALIASES）

    Returns:
        正規キーの初出順に並んだ TagGroup のリスト
    """
    if aliases is None:
        aliases = DEFAULT_ALIASES

    spellings: dict[str, dict[str, None]] = {}
    counts: Counter[str] = Counter()

    for raw in _iter_raw_tags(raws):
        key = normalize(raw, aliases)
        if not key:
            continue
        # dict をキー順序付き set として使う（初出順の保持）
        spellings.setdefault(key, {})[raw.strip()] = None
        counts[key] += 1

    groups: list[TagGroup] = []
    for key, originals in spellings.items():
        ordered = tuple(originals)
        groups.append(
            TagGroup(
                normalized=key,
                originals=ordered,
                suggestion=select_best_representative(ordered),
                count=counts[key],
            )
        )
    return groups


def filter_similar_groups(groups: Iterable[TagGroup]) -> list[TagGroup]:
    """2種類以上の綴りを持つグループだけを、綴りの種類数の多い順（同数なら元の順）で返す."""
    similar = [group for group in groups if len(group.originals) > 1]
    return sorted(similar, key=lambda group: len(group.originals), reverse=True)


def find_similar_tags(raws: Iterable[object] | None, aliases: AliasDictionary | None = None) -> list[TagGroup]:
    """表記揺れ（2種類以上の綴りを持つグループ）を抽出する.

    同じ綴りが何度出ても「表記揺れ」ではないため含めません（重複は統計側で扱う）。
    オペレーターのレビュー用で、保存データの自動書き換えには使いません。
    """
    return filter_similar_groups(cluster(raws, aliases))


def _display_sort_key(tag: str) -> tuple[str, str]:
    return (tag.casefold(), tag)


def normalize_tags(raws: Iterable[object] | None, aliases: AliasDictionary | None = None) -> list[str]:
    """タグ一覧を正規化して重複除去する（カタログ保存用）.

    Args:
        raws: 生タグの列
        aliases: エイリアス辞書（省略時は DEFAULT_ALIASES）

    Returns:
        正規キーごとに代表表記1つ。大文字小文字を区別しないアルファベット順

    Examples:
        >>> normalize_tags(["Turkey", "turkey", "Turk", "Spices", "spice"])
        ['Spices', 'Turkey']
    """
    representatives = [group.suggestion for group in cluster(raws, aliases)]
    return sorted(representatives, key=_display_sort_key)


def batch_normalize_tags(
    raws: Sequence[str],
    batch_size: int = 100,
    aliases: AliasDictionary | None = None,
) -> list[list[str]]:
    """固定サイズのバッチごとに normalize_tags を適用する.

    バッチ間の重複は統合しません（バッチ単位のマイグレーション用）。

    Raises:
        ValueError: batch_size が 1 未満の場合
    """
    if batch_size < 1:
        raise ValueError(f"batch_size must be >= 1, got {batch_size}")

    raws = list(_iter_raw_tags(raws))
    return [normalize_tags(raws[i : i + batch_size], aliases) for i in range(0, len(raws), batch_size)]
