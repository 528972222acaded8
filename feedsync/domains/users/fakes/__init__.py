"""Fakes for the users domain."""
