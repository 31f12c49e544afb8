"""
Error raised for invalid dispatch configuration.
"""


class ConfigurationError(ValueError):
    """Raised at construction time when a configuration value is invalid."""
