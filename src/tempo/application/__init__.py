"""Application layer - use cases orchestrating the matching domain."""
