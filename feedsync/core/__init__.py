"""Core module for feedsync."""
