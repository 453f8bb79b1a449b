from .config import ConfigError
from .extract import ExtractError

__all__ = ["ConfigError", "ExtractError"]
