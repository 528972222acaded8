"""Domain repositories backing the sync engine's collaborators."""
