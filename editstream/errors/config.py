class ConfigError(ValueError):
    """Invalid parser configuration."""
