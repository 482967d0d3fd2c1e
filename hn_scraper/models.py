"""データモデル定義."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Post:
    """フロントページの1投稿を表す.

    求人投稿 ("X is Hiring ...") などは author / score / comment_count を持たないため None。
    """

    rank: int  # ページ上の順位（1始まり）
    title: str
    url: str  # ページ上の href そのまま（相対 URL もあり得る）
    author: str | None = None
    score: int | None = None
    comment_count: int | None = None

    def to_dict(self) -> dict:
        """JSON 出力用の dict（キー順固定）."""
        return {
            "rank": self.rank,
            "title": self.title,
            "url": self.url,
            "author": self.author,
            "score": self.score,
            "comments": self.comment_count,
        }
