"""Hacker News スクレイパー — メインエントリーポイント.

処理フロー:
  1. --posts の値を検証（0〜100）
  2. フロントページ HTML を取得
  3. 投稿を抽出
  4. JSON 配列として標準出力へ書き出す

どの段階で失敗しても標準出力には何も書かず、標準エラーに 1 行出して終了コード 1 を返す。
"""

from __future__ import annotations

import logging
import sys
import time
from datetime import datetime

import typer

from hn_scraper import __version__
from hn_scraper.config import (
    DEFAULT_POSTS,
    FIXTURE_PATH,
    HN_URL,
    LOG_DIR,
    LOG_LEVEL,
    MAX_POSTS,
    parse_log_level,
)
from hn_scraper.errors import ConfigError, ScraperError
from hn_scraper.output import write_posts
from hn_scraper.scraper import Fetcher, build_fetcher, parse_posts

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


def _report(error: ScraperError) -> None:
    """失敗した段階と原因を標準エラーに 1 行で出す."""
    typer.echo(f"[{error.stage}] {error}", err=True)


def setup_logging() -> None:
    """ロギングの初期設定.

    標準出力は JSON 専用のため、ログは標準エラー（と HN_LOG_DIR があればファイル）へ出す。

    Raises:
        ConfigError: HN_LOG_LEVEL が不正
    """
    level = parse_log_level(LOG_LEVEL)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if LOG_DIR is not None:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        log_file = LOG_DIR / f"scraper_{datetime.now().strftime('%Y%m%d')}.log"
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=handlers,
    )


def run(post_count: int, fetcher: Fetcher | None = None) -> int:
    """メイン処理. 終了コードを返す."""
    logger.info("=== 投稿取得 開始 === posts=%d", post_count)
    start_time = time.time()

    try:
        if not 0 <= post_count <= MAX_POSTS:
            raise ConfigError(
                f"--posts は 0〜{MAX_POSTS} で指定してください (指定値: {post_count})"
            )

        # 0 件ならリクエスト不要
        if post_count == 0:
            write_posts([])
            return EXIT_OK

        fetcher = fetcher or build_fetcher(FIXTURE_PATH)
        html = fetcher.fetch(HN_URL)
        posts = parse_posts(html, post_count)
        logger.info("抽出結果: %d 件", len(posts))
    except ScraperError as e:
        _report(e)
        return EXIT_FAILURE

    write_posts(posts)

    elapsed = time.time() - start_time
    logger.info("=== 投稿取得 完了 === 所要時間: %.1f 秒", elapsed)
    return EXIT_OK


app = typer.Typer(
    name="hn-scraper",
    help="Hacker News のフロントページ投稿を JSON で出力する.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _version_callback(value: bool | None) -> None:
    if value:
        typer.echo(f"hn-scraper {__version__}")
        raise typer.Exit()


@app.command()
def cli(
    posts: int = typer.Option(
        DEFAULT_POSTS,
        "--posts",
        metavar="POSTS",
        help=f"取得する投稿数 (0〜{MAX_POSTS}, デフォルト {DEFAULT_POSTS})",
    ),
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="バージョンを表示して終了する.",
    ),
) -> None:
    """Hacker News HTML → JSON 投稿スクレイパー."""
    try:
        setup_logging()
    except ConfigError as e:
        _report(e)
        raise typer.Exit(code=EXIT_FAILURE) from None
    raise typer.Exit(code=run(posts))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
