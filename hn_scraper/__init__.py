"""Hacker News フロントページ → JSON スクレイパー."""

__version__ = "0.1.0"
