"""Bundled endpoint-table GitHub REST client."""
