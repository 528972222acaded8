"""Incremental synchronization of paginated remote content feeds."""
