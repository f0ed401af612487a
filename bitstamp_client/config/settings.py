"""
Client configuration management.
Loads settings from environment variables with sensible defaults.
"""
from dataclasses import dataclass, field
from functools import lru_cache
from os import getenv
from typing import List

DEFAULT_HOST = "https://www.bitstamp.net"
DEFAULT_USER_AGENT = "Bitstamp Python API Client|bitstamp-client"


@dataclass(frozen=True)
class Credentials:
    """API credentials. All three parts are required together."""
    api_key: str = ""
    api_secret: str = field(default="", repr=False)
    client_id: str = ""

    @property
    def missing(self) -> List[str]:
        """Names of the credential parts that are not set."""
        parts = {
            "api_key": self.api_key,
            "api_secret": self.api_secret,
            "client_id": self.client_id,
        }
        return [name for name, value in parts.items() if not value]

    @property
    def is_complete(self) -> bool:
        """Check if authenticated requests can be signed."""
        return not self.missing


@dataclass(frozen=True)
class BitstampConfig:
    """Bitstamp REST API configuration."""
    host: str = field(
        default_factory=lambda: getenv("BITSTAMP_HOST", DEFAULT_HOST)
    )
    request_timeout: float = field(
        default_factory=lambda: float(getenv("BITSTAMP_REQUEST_TIMEOUT", "5.0"))
    )  # seconds, per HTTP request
    api_key: str = field(
        default_factory=lambda: getenv("BITSTAMP_API_KEY", "")
    )
    api_secret: str = field(
        default_factory=lambda: getenv("BITSTAMP_API_SECRET", ""),
        repr=False,
    )
    client_id: str = field(
        default_factory=lambda: getenv("BITSTAMP_CLIENT_ID", "")
    )
    user_agent: str = DEFAULT_USER_AGENT

    @property
    def credentials(self) -> Credentials:
        """Return the credential triple."""
        return Credentials(
            api_key=self.api_key,
            api_secret=self.api_secret,
            client_id=self.client_id,
        )

    def api_url(self, action: str) -> str:
        """Build the endpoint URL for an API action (e.g. 'ticker')."""
        return f"{self.host.rstrip('/')}/api/{action}/"


@dataclass(frozen=True)
class AppConfig:
    """Application configuration container."""
    bitstamp: BitstampConfig = field(default_factory=BitstampConfig)
    log_level: str = field(
        default_factory=lambda: getenv("LOG_LEVEL", "INFO")
    )


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get singleton application configuration."""
    return AppConfig()
