"""
Configuration Management

Handles environment variables and configuration settings for the resource finder.
"""

import os
import logging
from typing import Optional
from pathlib import Path
from dotenv import load_dotenv


class Config:
    """Configuration management class."""

    def __init__(self, env_file: Optional[str] = None):
        """Initialize configuration from environment variables."""
        # Load .env file if it exists
        if env_file:
            load_dotenv(env_file)
        else:
            env_path = Path('.env')
            if env_path.exists():
                load_dotenv(env_path)

        # Public resources API
        self.resource_api_url = os.getenv('RESOURCE_API_URL', 'http://localhost:4000/')
        self.request_timeout = self._get_float('REQUEST_TIMEOUT', 30.0)
        self.max_retries = self._get_int('MAX_RETRIES', 3)
        self.page_size = self._get_int('PAGE_SIZE', 12)
        self.cache_ttl = self._get_float('CACHE_TTL', 1800.0)

        # Search behaviour
        self.fuzzy_threshold = self._get_float('FUZZY_THRESHOLD', 0.35)
        if not 0.0 <= self.fuzzy_threshold <= 1.0:
            logging.warning(f"FUZZY_THRESHOLD {self.fuzzy_threshold} is outside 0-1; clamping")
            self.fuzzy_threshold = min(max(self.fuzzy_threshold, 0.0), 1.0)
        self.max_distance_miles = self._get_float('MAX_DISTANCE_MILES', 50.0)
        self.regions_file = os.getenv('REGIONS_FILE') or None

        # Logging
        self.log_level = os.getenv('LOG_LEVEL', 'INFO').upper()
        self.log_file = os.getenv('LOG_FILE') or None

        if self.page_size < 1:
            logging.warning("PAGE_SIZE must be at least 1; using 12")
            self.page_size = 12

    @staticmethod
    def _get_float(name: str, default: float) -> float:
        raw = os.getenv(name)
        if raw is None or raw == '':
            return default
        try:
            return float(raw)
        except ValueError:
            logging.warning(f"Invalid {name} value {raw!r}; using default {default}")
            return default

    @staticmethod
    def _get_int(name: str, default: int) -> int:
        raw = os.getenv(name)
        if raw is None or raw == '':
            return default
        try:
            return int(raw)
        except ValueError:
            logging.warning(f"Invalid {name} value {raw!r}; using default {default}")
            return default

    def setup_logging(self):
        """Configure logging based on settings."""
        handlers = [logging.StreamHandler()]
        if self.log_file:
            handlers.append(logging.FileHandler(self.log_file))
        logging.basicConfig(
            level=getattr(logging, self.log_level, logging.INFO),
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            handlers=handlers,
            force=True
        )

    def get_api_config(self) -> dict:
        """Get API client configuration."""
        return {
            'base_url': self.resource_api_url,
            'timeout': self.request_timeout,
            'max_retries': self.max_retries,
            'page_size': self.page_size,
            'cache_ttl': self.cache_ttl
        }

    def get_search_config(self) -> dict:
        """Get discovery engine configuration."""
        return {
            'threshold': self.fuzzy_threshold,
            'max_distance_miles': self.max_distance_miles,
            'regions_file': self.regions_file,
            'page_size': self.page_size
        }
