"""Shared type aliases for screenlines."""
