"""Data holders for client configuration, responses and attempt records."""
