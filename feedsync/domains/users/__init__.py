"""Tracked users domain: the catalog of entities to scan."""
