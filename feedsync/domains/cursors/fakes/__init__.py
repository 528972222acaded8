"""Fakes for the cursors domain."""
