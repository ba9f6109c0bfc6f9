"""
Environment configuration for the osm-boundaries.com client.

Usage:
    from osm2rp.config.settings import Config
    config = Config()
    source = BoundarySource(options, config.endpoint)

Environment Variables:
    OSM_BOUNDARY_API_KEY: API key for osm-boundaries.com (read by the CLI)
    OSM_BOUNDARY_URL: Download endpoint
    OSM_BOUNDARY_TIMEOUT: Request timeout in seconds
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT_URL = "https://osm-boundaries.com/Download/Submit"
DEFAULT_TIMEOUT_S = 300.0


@dataclass
class EndpointConfig:
    """osm-boundaries.com endpoint configuration."""
    url: str = DEFAULT_ENDPOINT_URL
    timeout_s: float = DEFAULT_TIMEOUT_S

    def __post_init__(self):
        """Validate endpoint configuration."""
        if not self.url.startswith(('http://', 'https://')):
            raise ValueError("Endpoint URL must include protocol (https://)")

        if self.timeout_s <= 0:
            raise ValueError("Timeout must be positive")


class ConfigurationError(Exception):
    """Raised when configuration is invalid or incomplete."""
    pass


class Config:
    """
    Environment-backed settings for an extraction run.

    Environment variables loaded (in order of preference):
    1. Explicit environment file passed to constructor
    2. .env file in the current working directory
    3. System environment variables
    """

    def __init__(self, env_file: Optional[Path] = None):
        """
        Initialize configuration.

        Args:
            env_file: Explicit path to environment file
        """
        self._load_environment_variables(env_file)
        self._load_endpoint_config()

    def _load_environment_variables(self, env_file: Optional[Path]) -> None:
        """Load environment variables from appropriate source."""
        if env_file:
            if not env_file.exists():
                raise ConfigurationError(f"Specified env file not found: {env_file}")
            load_dotenv(env_file)
            logger.debug(f"Loaded configuration from {env_file}")
        elif load_dotenv(Path.cwd() / ".env"):
            logger.debug("Loaded configuration from .env")

    def _load_endpoint_config(self) -> None:
        """Load endpoint settings with sensible defaults."""
        url = os.getenv("OSM_BOUNDARY_URL", DEFAULT_ENDPOINT_URL)
        timeout = os.getenv("OSM_BOUNDARY_TIMEOUT", str(DEFAULT_TIMEOUT_S))

        try:
            self.endpoint = EndpointConfig(url=url, timeout_s=float(timeout))
        except ValueError as e:
            raise ConfigurationError(f"Invalid endpoint configuration: {e}") from e
