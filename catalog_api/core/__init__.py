"""Core app configuration, errors, security and token handling."""

from catalog_api.core.config import Settings, get_settings
from catalog_api.core.errors import DomainError, ErrorKind
from catalog_api.core.tokens import TokenManager

__all__ = ["DomainError", "ErrorKind", "Settings", "TokenManager", "get_settings"]
