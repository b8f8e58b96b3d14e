"""Shared helpers: logging setup. No cache logic."""
