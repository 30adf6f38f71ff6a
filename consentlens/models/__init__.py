"""Pydantic models shared across the detector, scorer and services."""
