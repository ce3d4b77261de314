"""エイリアス辞書（表記揺れ → 正規キー）.

カタログタグの既知の表記揺れを、意味カテゴリ（原産地・食品カテゴリ・ブランド・サイズ）ごとに
正規キーへ寄せるための固定辞書です。

設計方針:
    - 辞書は不変（immutable）な値として扱い、プロセス起動時に1回だけ構築して正規化関数へ渡す
    - 正規キー自身も自分自身へマップする（`spices` → `spices`）
    - 正規キー・表記揺れは normalize と同じ sanitize で整形してから登録する（整形後に空になる項目はエラー）
    - 先頭トークン一致（`turkey-product` → `turkey`）は誤統合のリスクがあるため既定では無効。
      `prefix_keys` に明示した正規キーだけが先頭トークンで一致する

使用例:
    >>> aliases = load_alias_dictionary(Path("tag_aliases.yml"))
    >>> aliases.lookup("turkish")
    'turkey'
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from pathlib import Path
from types import MappingProxyType

import yaml
from loguru import logger

from .exceptions import AliasConfigError
from .text import sanitize

# カテゴリ -> {正規キー -> 表記揺れ一覧}
DEFAULT_ALIAS_GROUPS: Mapping[str, Mapping[str, tuple[str, ...]]] = MappingProxyType(
    {
        "origin": MappingProxyType(
            {
                "turkey": ("turk", "turkish", "turkiye"),
            }
        ),
        "food_category": MappingProxyType(
            {
                "spices": ("spice", "seasoning", "seasonings"),
                "herbs": ("herb",),
                "vegetables": ("veggies", "produce", "greens"),
                "fruit": ("fruits",),
                "meat": ("meats", "poultry", "beef", "chicken", "pork", "lamb"),
                "dairy": ("milk", "cheese", "yogurt"),
                "grain": ("grains", "cereals", "bread", "pasta"),
            }
        ),
        "brand": MappingProxyType(
            {
                "mr chef": ("mrchef", "mr-chef"),
            }
        ),
        "size": MappingProxyType(
            {
                "small": ("xs",),
                "medium": (),
                "large": ("extra large", "xl"),
            }
        ),
    }
)


class AliasDictionary:
    """表記揺れ → 正規キーの不変な対応表.

    Args:
        groups: カテゴリ -> {正規キー -> 表記揺れ一覧}
        prefix_keys: 先頭トークン一致を許可する正規キー
        source: 設定の出どころ（エラーメッセージ用）

    Raises:
        AliasConfigError: 形式不正、または同じ表記揺れが異なる正規キーに割り当てられている場合
    """

    def __init__(
        self,
        groups: Mapping[str, Mapping[str, Iterable[str]]],
        prefix_keys: Iterable[str] = (),
        source: str = "<inline>",
    ) -> None:
        self.source = source

        lookup: dict[str, str] = {}
        frozen_groups: dict[str, Mapping[str, tuple[str, ...]]] = {}

        for category, entries in groups.items():
            if not isinstance(entries, Mapping):
                raise AliasConfigError(
                    source,
                    f"category '{category}' must map canonical keys to variant lists, "
                    f"got {type(entries).__name__}",
                )

            frozen_entries: dict[str, tuple[str, ...]] = {}
            for canonical, variants in entries.items():
                canonical_key = sanitize(str(canonical))
                if not canonical_key:
                    raise AliasConfigError(
                        source,
                        f"canonical key {canonical!r} in category '{category}' is empty after sanitizing",
                    )
                if variants is None:
                    variants = ()
                if isinstance(variants, str) or not isinstance(variants, Iterable):
                    raise AliasConfigError(
                        source,
                        f"variants of '{canonical_key}' must be a list, got {type(variants).__name__}",
                    )

                variant_keys: list[str] = []
                for variant in variants:
                    variant_key = sanitize(str(variant))
                    if not variant_key:
                        raise AliasConfigError(
                            source, f"variant {variant!r} of '{canonical_key}' is empty after sanitizing"
                        )
                    variant_keys.append(variant_key)

                for key in (canonical_key, *variant_keys):
                    existing = lookup.get(key)
                    if existing is not None and existing != canonical_key:
                        raise AliasConfigError(
                            source,
                            f"'{key}' is mapped to both '{existing}' and '{canonical_key}'",
                        )
                    lookup[key] = canonical_key

                frozen_entries[canonical_key] = tuple(variant_keys)
            frozen_groups[str(category)] = MappingProxyType(frozen_entries)

        prefix = frozenset(sanitize(str(k)) for k in prefix_keys)
        unknown = sorted(prefix - set(lookup.values()))
        if unknown:
            raise AliasConfigError(source, f"prefix_keys are not canonical keys: {', '.join(unknown)}")

        self._lookup: Mapping[str, str] = MappingProxyType(lookup)
        self._groups: Mapping[str, Mapping[str, tuple[str, ...]]] = MappingProxyType(frozen_groups)
        self._prefix_keys = prefix

    @property
    def groups(self) -> Mapping[str, Mapping[str, tuple[str, ...]]]:
        return self._groups

    @property
    def categories(self) -> tuple[str, ...]:
        return tuple(self._groups)

    @property
    def prefix_keys(self) -> frozenset[str]:
        return self._prefix_keys

    def canonical_keys(self) -> frozenset[str]:
        return frozenset(self._lookup.values())

    def lookup(self, key: str) -> str | None:
        """完全一致で正規キーを引く（見つからなければ None）."""
        return self._lookup.get(sanitize(key))

    def lookup_prefix(self, token: str) -> str | None:
        """先頭トークンで正規キーを引く.

        `prefix_keys` に含まれる正規キーへ解決される場合のみ一致とみなします。
        """
        if not self._prefix_keys:
            return None
        canonical = self._lookup.get(sanitize(token))
        if canonical is not None and canonical in self._prefix_keys:
            return canonical
        return None

    def with_prefix_keys(self, prefix_keys: Iterable[str]) -> AliasDictionary:
        """同じ辞書内容で prefix_keys だけ差し替えた新しい辞書を返す."""
        return AliasDictionary(self._groups, prefix_keys=prefix_keys, source=self.source)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and sanitize(key) in self._lookup

    def __len__(self) -> int:
        return len(self._lookup)

    def __repr__(self) -> str:
        return (
            f"AliasDictionary(source={self.source!r}, categories={list(self.categories)!r}, "
            f"entries={len(self)}, prefix_keys={sorted(self._prefix_keys)!r})"
        )


DEFAULT_ALIASES = AliasDictionary(DEFAULT_ALIAS_GROUPS, source="<default>")


def load_alias_dictionary(path: Path | str) -> AliasDictionary:
    """JSON / YAML ファイルからエイリアス辞書を読み込む.

    ファイル形式:
        groups:
          origin:
            turkey: [turk, turkish, turkiye]
        prefix_keys: [turkey]   # 任意

    Args:
        path: 辞書ファイルのパス（.json / .yaml / .yml）

    Returns:
        エイリアス辞書

    Raises:
        FileNotFoundError: ファイルが存在しない場合
        AliasConfigError: 形式が不正な場合
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Alias dictionary file not found: {path}")

    suffix = path.suffix.lower()
    try:
        with open(path, encoding="utf-8") as f:
            if suffix == ".json":
                data = json.load(f)
            elif suffix in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            else:
                raise AliasConfigError(str(path), f"unsupported file type '{suffix}' (use .json/.yaml/.yml)")
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise AliasConfigError(str(path), f"failed to parse: {e}") from e

    if not isinstance(data, dict):
        raise AliasConfigError(str(path), f"root must be a mapping, got {type(data).__name__}")

    groups = data.get("groups")
    if not isinstance(groups, dict):
        raise AliasConfigError(str(path), "missing 'groups' mapping")

    prefix_keys = data.get("prefix_keys") or []
    if isinstance(prefix_keys, str) or not isinstance(prefix_keys, list):
        raise AliasConfigError(str(path), "'prefix_keys' must be a list")

    aliases = AliasDictionary(groups, prefix_keys=prefix_keys, source=str(path))
    logger.info(f"Loaded {len(aliases)} alias entries ({len(aliases.categories)} categories) from {path}")
    return aliases
