"""設定モジュール — 環境変数・定数定義.

環境変数の値は文字列のまま保持し、使う時点で parse_timeout / parse_log_level で検証する。
不正な値は ConfigError になる（--help などは値に関係なく動く）。
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from hn_scraper.errors import ConfigError

# .env はプロジェクトルートに配置
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(_PROJECT_ROOT / ".env")

# --- Hacker News ---
HN_URL = os.getenv("HN_URL", "https://news.ycombinator.com/news")

# --- User-Agent ---
USER_AGENT = os.getenv(
    "HN_USER_AGENT",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/131.0.0.0 Safari/537.36",
)

# --- リクエスト設定 ---
DEFAULT_REQUEST_TIMEOUT = 15.0  # 秒
REQUEST_TIMEOUT = os.getenv("HN_REQUEST_TIMEOUT", str(DEFAULT_REQUEST_TIMEOUT))

# テスト用: 設定されていればネットワークの代わりにこの HTML を読む
FIXTURE_PATH: str | None = os.getenv("HN_FIXTURE_HTML") or None

# --- 取得件数 ---
DEFAULT_POSTS = 30
MAX_POSTS = 100

# タイトル・投稿者名の最大文字数
MAX_TEXT_LENGTH = 256

# --- ログ ---
LOG_LEVEL = os.getenv("HN_LOG_LEVEL", "WARNING")
LOG_DIR: Path | None = Path(os.environ["HN_LOG_DIR"]) if os.getenv("HN_LOG_DIR") else None


def parse_timeout(value: str) -> float:
    """HN_REQUEST_TIMEOUT を秒数に変換する. 正の数でなければ ConfigError."""
    try:
        timeout = float(value)
    except ValueError:
        raise ConfigError(f"HN_REQUEST_TIMEOUT が数値ではありません: {value!r}") from None
    if not timeout > 0:
        raise ConfigError(f"HN_REQUEST_TIMEOUT は正の数で指定してください: {value!r}")
    return timeout


def parse_log_level(value: str) -> int:
    """HN_LOG_LEVEL (DEBUG / INFO / ...) をログレベルに変換する."""
    level = logging.getLevelName(value.strip().upper())
    if not isinstance(level, int):
        raise ConfigError(f"HN_LOG_LEVEL が不正です: {value!r}")
    return level
