"""
In-memory session storage implementation.
"""
import threading
from typing import Optional

from .protocols import SessionStorage
from .models import AuthorizedSession


class MemorySession(SessionStorage):
    """
    In-memory session storage.

    Holds at most one AuthorizedSession. The lock guards only the read or
    the replacement of the value, so callers never wait on network I/O.

    Example:
        >>> storage = MemorySession()
        >>> storage.save(session)
        >>> storage.load() is session
        True
    """

    def __init__(self):
        """Initialize memory session storage."""
        self._lock = threading.Lock()
        self._data: Optional[AuthorizedSession] = None

    def load(self) -> Optional[AuthorizedSession]:
        """
        Load the stored session.

        Returns:
            AuthorizedSession if one is stored, None otherwise
        """
        with self._lock:
            return self._data

    def save(self, data: AuthorizedSession) -> None:
        """
        Store a session, replacing any previous one.

        Args:
            data: Session to store
        """
        with self._lock:
            self._data = data

    def delete(self, expected: Optional[AuthorizedSession] = None) -> bool:
        """
        Delete the stored session.

        Args:
            expected: If given, delete only while this session is still stored

        Returns:
            True if a session was deleted
        """
        with self._lock:
            if self._data is None:
                return False
            if expected is not None and self._data is not expected:
                return False
            self._data = None
            return True

    def exists(self) -> bool:
        """Check if a session is stored."""
        with self._lock:
            return self._data is not None
