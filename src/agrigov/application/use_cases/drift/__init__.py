"""Permission drift use cases."""
