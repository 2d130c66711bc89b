"""
Per-bucket upload endpoint cache.

Upload URLs stay valid for LEASE_TTL after they are issued; the cache hands
out the same lease until then and fetches a new one afterwards.
"""
import threading
import time
from typing import Callable, Optional

from ..models import LEASE_TTL, UploadLease
from ..api.errors import B2APIError
from ..logging import get_logger

logger = get_logger('blazepy.upload.lease')


class UploadLeaseCache:
    """
    Caches one UploadLease for one bucket.

    The freshness check and the refresh are separate steps: concurrent
    callers that see an expired lease may each fetch a new one and the last
    write wins. A lease older than the TTL is never returned.

    Example:
        >>> cache = UploadLeaseCache("bucket-id", api_client, session_cache)
        >>> lease = await cache.get_or_refresh_lease()
    """

    def __init__(
        self,
        bucket_id: str,
        api_client,
        session_cache,
        clock: Callable[[], float] = time.time,
        ttl: float = LEASE_TTL
    ):
        """
        Initialize lease cache.

        Args:
            bucket_id: Bucket whose upload endpoint is cached
            api_client: AsyncAPIClient used to fetch upload URLs
            session_cache: SessionCache supplying the account authorization
            clock: Returns the current Unix time in seconds
            ttl: Lease validity window in seconds
        """
        self._bucket_id = bucket_id
        self._api = api_client
        self._sessions = session_cache
        self._clock = clock
        self._ttl = ttl
        self._lock = threading.Lock()
        self._lease: Optional[UploadLease] = None

    @property
    def bucket_id(self) -> str:
        return self._bucket_id

    def peek(self) -> Optional[UploadLease]:
        """Get the cached lease, valid or not, without fetching."""
        with self._lock:
            return self._lease

    async def get_or_refresh_lease(self) -> UploadLease:
        """
        Get a lease younger than the TTL, fetching one if needed.

        Returns:
            Valid upload lease

        Raises:
            B2APIError: If authorization or the upload URL request fails;
                the previously cached lease is kept
        """
        now = self._clock()
        with self._lock:
            lease = self._lease
        if lease is not None and lease.is_valid(now, self._ttl):
            return lease

        logger.debug(f"Fetching upload URL for bucket {self._bucket_id}")
        session = await self._sessions.get_or_authorize()
        try:
            lease = await self._api.get_upload_url(session, self._bucket_id, now)
        except B2APIError as e:
            if e.is_auth_error:
                self._sessions.invalidate(session)
            raise

        with self._lock:
            self._lease = lease
        logger.debug(f"Upload URL leased for bucket {self._bucket_id}")
        return lease

    def invalidate(self, lease: Optional[UploadLease] = None) -> None:
        """
        Drop the cached lease so the next call fetches a new one.

        Args:
            lease: If given, drop only while this lease is still cached
        """
        with self._lock:
            if lease is None or self._lease is lease:
                self._lease = None
