"""B2 API module."""
from .errors import B2APIError, ErrorClassifier, ErrorKind
from .config import APIConfig, ProxyConfig, TimeoutConfig, DEFAULT_API_URL
from .async_client import AsyncAPIClient
from .async_auth import AsyncAuthService

__all__ = [
    'AsyncAPIClient',
    'AsyncAuthService',
    
    # Configuration
    'APIConfig',
    'ProxyConfig',
    'TimeoutConfig',
    'DEFAULT_API_URL',
    
    # Errors
    'B2APIError',
    'ErrorClassifier',
    'ErrorKind',
]
