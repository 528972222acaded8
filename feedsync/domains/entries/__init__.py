"""Record store domain."""
