"""Grant administration use cases."""
