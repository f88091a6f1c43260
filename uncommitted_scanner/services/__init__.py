"""
Service layer for the uncommitted changes scanner.
"""

from .config_manager import ConfigurationManager

__all__ = [
    "ConfigurationManager",
]
