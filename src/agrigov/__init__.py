"""Access governance engine for the farm-management platform."""

__version__ = "0.1.0"
