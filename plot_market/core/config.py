"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from environment
variables.  Defaults are provided for all fields so the client can be
constructed without any environment at all; point
``PLOT_MARKET_API_URL`` at a real backend before making requests.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Client settings loaded from environment variables."""

    # Base URL of the marketplace backend, including the ``/api`` prefix.
    api_url: str = os.getenv("PLOT_MARKET_API_URL", "http://localhost:3000/api")

    # Optional bearer token forwarded in the ``Authorization`` header.  The
    # token is issued by the identity provider; this package never obtains
    # one by itself.
    api_key: str = os.getenv("PLOT_MARKET_API_KEY", "")

    # Fixed client-side timeout in seconds.  There is no retry policy.
    timeout: float = float(os.getenv("PLOT_MARKET_TIMEOUT", "15"))

    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables must
# be set before importing this module.
settings = Settings()
