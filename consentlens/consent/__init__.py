"""Heuristic cookie-banner detection over DOM snapshots."""
