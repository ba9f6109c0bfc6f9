"""
Configuration module for the OSM to RapidPro extractor.
"""

from .settings import (
    Config,
    ConfigurationError,
    EndpointConfig,
)

__all__ = [
    'Config',
    'ConfigurationError',
    'EndpointConfig',
]
