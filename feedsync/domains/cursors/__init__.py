"""Cursor store domain."""
