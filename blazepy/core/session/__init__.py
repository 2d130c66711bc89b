"""
Session management module.

Caches the account authorization shared by a client's calls.
"""
from .protocols import SessionStorage
from .models import ApplicationKey, AuthorizedSession
from .memory_session import MemorySession
from .session_cache import SessionCache

__all__ = [
    'SessionStorage',
    'ApplicationKey',
    'AuthorizedSession',
    'MemorySession',
    'SessionCache',
]
