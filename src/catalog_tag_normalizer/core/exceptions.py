"""Catalog tag normalizer exceptions.

カスタム例外クラスを定義します。
タグデータ自体は例外を出さない（空/ゴミは除外される）ため、ここにあるのは設定系のみです。
"""


class AliasConfigError(ValueError):
    """エイリアス辞書の設定が不正な場合の例外.

    辞書ファイルの形式不正や、同じ表記揺れが複数の正規キーに割り当てられている
    （どちらに寄せるべきか決められない）場合に送出します。

    Attributes:
        source: 設定の出どころ（ファイルパス、または "<inline>"）
        detail: 不正内容の説明
    """

    def __init__(self, source: str, detail: str) -> None:
        """例外初期化.

        Args:
            source: 設定の出どころ
            detail: 不正内容の説明
        """
        self.source = source
        self.detail = detail
        super().__init__(f"Invalid alias dictionary ({source}): {detail}")
