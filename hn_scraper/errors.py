"""例外定義.

どの段階（設定・取得・パース）で失敗したかを stage で表す。
"""

from __future__ import annotations


class ScraperError(Exception):
    """スクレイパーの全エラーの基底クラス."""

    stage = "scraper"


class ConfigError(ScraperError):
    """--posts などの設定値が不正."""

    stage = "config"


class FetchError(ScraperError):
    """HTML の取得に失敗（ネットワークエラー・非 2xx ステータス）."""

    stage = "fetch"

    def __init__(self, message: str, url: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ParseError(ScraperError):
    """HTML のパースに失敗."""

    stage = "parse"


class InvalidDocumentError(ParseError):
    """ドキュメント自体が解析できない（空・要素なし・順位の不整合）."""


class MissingFieldError(ParseError):
    """エントリに必須フィールド（title / url）がない."""

    def __init__(self, field: str, position: int):
        super().__init__(f"{position} 番目のエントリに {field} がありません")
        self.field = field
        self.position = position
