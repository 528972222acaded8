"""Fakes for the events domain."""
