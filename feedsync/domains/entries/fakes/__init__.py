"""Fakes for the entries domain."""
