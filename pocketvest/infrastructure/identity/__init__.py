"""Infrastructure adapters for the identity bounded context."""
