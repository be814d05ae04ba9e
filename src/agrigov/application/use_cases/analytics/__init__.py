"""Access analytics use cases."""
