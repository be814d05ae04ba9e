"""Reviewer notification adapters."""
