"""Outbound collaborators: the storage API and remote policy fetching."""
