"""Platform package: the feed ingestion engine."""
