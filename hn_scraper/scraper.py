"""Hacker News フロントページのスクレイピングモジュール.

取得:
  HttpFetcher   — requests による GET（本番）
  FixtureFetcher — 保存済み HTML を返す（テスト・オフライン用）

パース:
  tr.athing（タイトル行）と直後の tr（subtext 行: score / author / comments）を
  1 エントリとして文書順に取り出す。
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Protocol

import requests
from bs4 import BeautifulSoup, Tag

from hn_scraper.config import (
    DEFAULT_REQUEST_TIMEOUT,
    MAX_POSTS,
    MAX_TEXT_LENGTH,
    REQUEST_TIMEOUT,
    USER_AGENT,
    parse_timeout,
)
from hn_scraper.errors import FetchError, InvalidDocumentError, MissingFieldError
from hn_scraper.models import Post

logger = logging.getLogger(__name__)

# "22." / "82 points" / "14\xa0comments" の先頭の数値
_NUMBER_PREFIX_PATTERN = re.compile(r"\s*(\d+)")


class Fetcher(Protocol):
    """URL から HTML 文字列を取得するもの."""

    def fetch(self, url: str) -> str:
        ...


class HttpFetcher:
    """requests で HTML を取得する."""

    def __init__(
        self,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        user_agent: str = USER_AGENT,
        session: requests.Session | None = None,
    ) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._session = session

    def fetch(self, url: str) -> str:
        """URL の HTML を取得する.

        Raises:
            FetchError: ネットワークエラー、または 2xx 以外のステータス
        """
        headers = {
            "User-Agent": self.user_agent,
            "Accept-Language": "en-US,en;q=0.9",
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        }
        session = self._session or requests.Session()
        try:
            resp = session.get(url, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("ページ取得失敗: url=%s, error=%s", url, e)
            raise FetchError(f"{url} の取得に失敗しました: {e}", url=url) from e
        finally:
            if self._session is None:
                session.close()

        if not 200 <= resp.status_code < 300:
            logger.error("ページ取得失敗: url=%s, status=%d", url, resp.status_code)
            raise FetchError(
                f"{url} が HTTP {resp.status_code} を返しました",
                url=url,
                status_code=resp.status_code,
            )
        return resp.text


class FixtureFetcher:
    """保存済みの HTML ファイルを返す。URL は無視する."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def fetch(self, url: str) -> str:
        logger.info("フィクスチャを使用: %s (url=%s)", self.path, url)
        try:
            return self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise FetchError(f"フィクスチャ {self.path} を読めません: {e}", url=url) from e


def build_fetcher(fixture_path: str | Path | None = None) -> Fetcher:
    """フィクスチャが指定されていれば FixtureFetcher、なければ HttpFetcher を返す.

    Raises:
        ConfigError: HN_REQUEST_TIMEOUT が不正
    """
    if fixture_path:
        return FixtureFetcher(fixture_path)
    return HttpFetcher(timeout=parse_timeout(REQUEST_TIMEOUT), user_agent=USER_AGENT)


def parse_posts(html: str, limit: int) -> list[Post]:
    """フロントページ HTML から最大 limit 件の投稿を抽出する.

    不正なエントリ（タイトル・リンクなし）があればその時点で全体を中断する。

    Raises:
        InvalidDocumentError: HTML が空・要素なし、または順位が単調増加していない
        MissingFieldError: エントリに title / url がない
    """
    limit = max(0, min(limit, MAX_POSTS))

    if not html or not html.strip():
        raise InvalidDocumentError("HTML が空です")

    soup = BeautifulSoup(html, "html.parser")
    if soup.find() is None:
        raise InvalidDocumentError("HTML 要素が見つかりません")

    rows = soup.select("tr.athing")
    logger.debug("エントリ行: %d 件", len(rows))

    posts: list[Post] = []
    for position, row in enumerate(rows[:limit], start=1):
        post = _parse_entry(row, position)
        if posts and post.rank <= posts[-1].rank:
            raise InvalidDocumentError(
                f"順位が単調増加していません: {posts[-1].rank} → {post.rank}"
            )
        posts.append(post)

    return posts


def _parse_entry(row: Tag, position: int) -> Post:
    """tr.athing とその次の tr から Post を組み立てる."""
    link = row.select_one("span.titleline > a") or row.select_one("a.storylink")
    if link is None:
        raise MissingFieldError("title", position)

    title = link.get_text(strip=True)
    if not title:
        raise MissingFieldError("title", position)

    url = link.get("href")
    if not url:
        raise MissingFieldError("url", position)

    rank_tag = row.select_one("span.rank")
    rank = _number_prefix(rank_tag) if rank_tag else None

    author = score = comment_count = None
    subtext = _subtext(row)
    if subtext is not None:
        user = subtext.select_one("a.hnuser")
        if user is not None:
            author = user.get_text(strip=True)[:MAX_TEXT_LENGTH] or None

        score_tag = subtext.select_one("span.score")
        if score_tag is not None:
            score = _number_prefix(score_tag)

        comment_count = _comment_count(subtext)

    return Post(
        rank=rank or position,
        title=title[:MAX_TEXT_LENGTH],
        url=url,
        author=author,
        score=score,
        comment_count=comment_count,
    )


def _subtext(row: Tag) -> Tag | None:
    """タイトル行の直後の tr から td.subtext を取得する."""
    next_row = row.find_next_sibling("tr")
    if next_row is None or "athing" in (next_row.get("class") or []):
        return None
    return next_row.select_one("td.subtext") or next_row


def _comment_count(subtext: Tag) -> int | None:
    """subtext 末尾のコメントリンクからコメント数を取得する.

    "discuss"（コメント 0 件）や求人投稿（コメントリンクなし）は None。
    """
    links = subtext.find_all("a")
    if not links:
        return None
    last = links[-1]
    if "comment" not in last.get_text():
        return None
    return _number_prefix(last)


def _number_prefix(tag: Tag) -> int | None:
    """テキスト先頭の数値を返す。数値で始まらなければ None."""
    m = _NUMBER_PREFIX_PATTERN.match(tag.get_text())
    if m:
        return int(m.group(1))
    return None
