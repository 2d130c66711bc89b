"""
Session storage protocols.

Defines the interface for authorized-session storage backends.
"""
from typing import Protocol, Optional, runtime_checkable
from .models import AuthorizedSession


@runtime_checkable
class SessionStorage(Protocol):
    """
    Protocol for authorized-session storage implementations.

    Implementations must be safe to call from concurrent tasks; none of
    these methods may suspend.
    """

    def load(self) -> Optional[AuthorizedSession]:
        """
        Load the stored session.

        Returns:
            AuthorizedSession if one is stored, None otherwise
        """
        ...

    def save(self, data: AuthorizedSession) -> None:
        """
        Store a session, replacing any previous one.

        Args:
            data: Session to store
        """
        ...

    def delete(self, expected: Optional[AuthorizedSession] = None) -> bool:
        """
        Delete the stored session.

        Args:
            expected: If given, delete only while this session is still stored

        Returns:
            True if a session was deleted
        """
        ...

    def exists(self) -> bool:
        """
        Check if a session is stored.
        """
        ...
