"""Resumable paginated feed synchronization."""
