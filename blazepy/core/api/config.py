"""
API configuration module.

Provides configuration for the B2 API client.
"""
from dataclasses import dataclass, field
from typing import Optional, Dict, Any

import aiohttp

DEFAULT_API_URL = 'https://api.backblazeb2.com'


@dataclass
class ProxyConfig:
    """
    Proxy configuration.

    Supports HTTP and HTTPS proxies.
    """
    url: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None

    def to_aiohttp_proxy(self) -> Optional[str]:
        """Convert to aiohttp proxy format."""
        if not self.url:
            return None

        if self.username and self.password:
            if '://' in self.url:
                protocol, rest = self.url.split('://', 1)
                return f"{protocol}://{self.username}:{self.password}@{rest}"

        return self.url


@dataclass
class TimeoutConfig:
    """
    Timeout configuration.

    Every timeout surfaces as an ErrorKind.TIMEOUT failure; nothing is retried.
    """
    total: float = 300.0  # Total request timeout
    connect: float = 30.0
    sock_read: float = 60.0
    sock_connect: float = 30.0

    def to_aiohttp_timeout(self) -> aiohttp.ClientTimeout:
        """Convert to aiohttp ClientTimeout."""
        return aiohttp.ClientTimeout(
            total=self.total,
            connect=self.connect,
            sock_read=self.sock_read,
            sock_connect=self.sock_connect
        )


@dataclass
class APIConfig:
    """
    Complete API configuration.

    Centralizes all configuration options for the B2 API client.
    """
    # Authorization endpoint; per-account API URLs come from the authorize call
    api_url: str = DEFAULT_API_URL
    api_version: str = 'v3'

    user_agent: str = 'blazepy/0.1.0'

    keepalive: bool = True

    proxy: Optional[ProxyConfig] = None
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)

    extra_headers: Dict[str, str] = field(default_factory=dict)

    log_level: int = 20  # logging.INFO

    limit_per_host: int = 10
    limit: int = 100

    @classmethod
    def default(cls) -> 'APIConfig':
        """Create default configuration."""
        return cls()

    @classmethod
    def with_proxy(cls, proxy_url: str, **kwargs) -> 'APIConfig':
        """Create configuration with proxy."""
        return cls(
            proxy=ProxyConfig(url=proxy_url),
            **kwargs
        )

    def endpoint(self, base_url: str, name: str) -> str:
        """
        Build the URL of a B2 API operation.

        Args:
            base_url: API base URL (authorization host or account API URL)
            name: Operation name, e.g. 'b2_list_buckets'
        """
        return f"{base_url.rstrip('/')}/b2api/{self.api_version}/{name}"

    def get_connector_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp TCPConnector."""
        kwargs: Dict[str, Any] = {
            'limit': self.limit,
            'limit_per_host': self.limit_per_host,
        }
        if not self.keepalive:
            kwargs['force_close'] = True
        return kwargs

    def get_session_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp ClientSession."""
        headers = {
            'User-Agent': self.user_agent,
            **self.extra_headers
        }

        return {
            'headers': headers,
            'timeout': self.timeout.to_aiohttp_timeout(),
        }
