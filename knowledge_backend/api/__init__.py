"""HTTP API for document registration and search."""
