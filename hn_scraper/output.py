"""JSON 出力モジュール.

欠損フィールド（author / score / comments）は省略せず null として出力する。
"""

from __future__ import annotations

import json
import sys
from collections.abc import Iterable
from typing import TextIO

from hn_scraper.models import Post


def serialize_posts(posts: Iterable[Post]) -> str:
    """投稿リストを JSON 配列の文字列にする."""
    return json.dumps([p.to_dict() for p in posts], ensure_ascii=False, indent=2)


def write_posts(posts: Iterable[Post], stream: TextIO | None = None) -> None:
    """投稿リストを JSON で stream（省略時は標準出力）へ一度に書き出す."""
    stream = stream or sys.stdout
    stream.write(serialize_posts(posts) + "\n")
    stream.flush()
