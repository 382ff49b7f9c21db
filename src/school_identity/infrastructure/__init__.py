"""Infrastructure adapters for identity."""
