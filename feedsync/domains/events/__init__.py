"""Event log domain."""
