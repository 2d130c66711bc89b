"""
Lazily populated account authorization.

The cache is shared by every call made through one client handle.
"""
from typing import Optional

from .memory_session import MemorySession
from .models import ApplicationKey, AuthorizedSession
from .protocols import SessionStorage
from ..logging import get_logger

logger = get_logger('blazepy.session')


class SessionCache:
    """
    Returns the cached AuthorizedSession, authorizing on first use.

    Concurrent callers that find the cache empty may each authorize; the
    last stored session wins. A failed authorization stores nothing.

    Example:
        >>> cache = SessionCache(key, auth_service)
        >>> session = await cache.get_or_authorize()
    """

    def __init__(
        self,
        key: ApplicationKey,
        auth_service,
        storage: Optional[SessionStorage] = None
    ):
        """
        Initialize session cache.

        Args:
            key: Application key used for authorization
            auth_service: AsyncAuthService performing the authorize exchange
            storage: Session storage (MemorySession if not provided)
        """
        self._key = key
        self._auth = auth_service
        self._storage = storage or MemorySession()

    @property
    def key(self) -> ApplicationKey:
        return self._key

    def get(self) -> Optional[AuthorizedSession]:
        """Get the cached session without authorizing."""
        return self._storage.load()

    async def get_or_authorize(self) -> AuthorizedSession:
        """
        Get the cached session, authorizing if none is cached.

        Returns:
            Authorized session

        Raises:
            B2APIError: If authorization fails
        """
        session = self._storage.load()
        if session is not None:
            return session

        return await self.authorize()

    async def authorize(self) -> AuthorizedSession:
        """
        Authorize unconditionally and replace the cached session.

        Raises:
            B2APIError: If authorization fails (cache is left untouched)
        """
        logger.debug(f"Authorizing account with key {self._key.id}")
        session = await self._auth.authorize_account(self._key)
        self._storage.save(session)
        logger.info(f"Authorized account {session.account_id}")
        return session

    def invalidate(self, session: Optional[AuthorizedSession] = None) -> None:
        """
        Drop the cached session so the next call re-authorizes.

        Args:
            session: If given, drop only while this session is still cached
        """
        if self._storage.delete(session):
            logger.info("Session invalidated")
