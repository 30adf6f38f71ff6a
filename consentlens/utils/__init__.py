"""Shared helpers: logging, errors and URLs."""
