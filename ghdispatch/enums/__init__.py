"""Enums for rate limit groups and attempt outcomes."""
