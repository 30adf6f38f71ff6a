"""Playwright adapters: DOM snapshots, mutation observation and page scanning."""
