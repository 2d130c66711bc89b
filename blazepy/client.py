"""
B2Client - High-level async client for Backblaze B2.

Example:
    >>> async with B2Client(key_id, application_key) as b2:
    ...     bucket = await b2.get_bucket("photos")
    ...     uploaded = await bucket.upload_file("cat.jpg", "pets/cat.jpg")
"""
import threading
import time
from typing import Callable, Dict, List, Optional, Tuple

from .bucket import Bucket
from .core.api import (
    APIConfig,
    AsyncAPIClient,
    AsyncAuthService,
    B2APIError,
    ProxyConfig,
    TimeoutConfig,
)
from .core.listing import ListBucketsConfig, ListFileNamesConfig, ListFileNamesResult
from .core.logging import get_logger
from .core.session import ApplicationKey, AuthorizedSession, SessionCache, SessionStorage
from .core.upload import LEASE_TTL, UploadCoordinator, UploadedFile, UploadLeaseCache
from .core.upload.coordinator import ContentSource


class B2Client:
    """
    High-level async client for Backblaze B2.

    One client handle owns:
    - the HTTP transport
    - the account SessionCache (authorized lazily on first use)
    - one UploadLeaseCache per bucket id

    All of them are shared by concurrent calls made through the handle.
    A bad or expired account token invalidates the cached session; the
    error is still raised and the next call re-authorizes.

    Example:
        >>> client = B2Client(key_id, application_key)
        >>> buckets = await client.list_buckets()
        >>> await client.close()
    """

    def __init__(
        self,
        key_id: str,
        application_key: str,
        *,
        config: Optional[APIConfig] = None,
        session_storage: Optional[SessionStorage] = None,
        clock: Callable[[], float] = time.time,
        lease_ttl: float = LEASE_TTL
    ):
        """
        Initialize B2 client.

        Args:
            key_id: Application key id
            application_key: Application key secret
            config: Optional API configuration
            session_storage: Optional storage for the authorized session
            clock: Time source for upload lease expiry
            lease_ttl: Upload lease validity window in seconds
        """
        self._logger = get_logger('blazepy.client')
        self._config = config or APIConfig.default()
        self._api = AsyncAPIClient(self._config)
        self._auth = AsyncAuthService(self._api)
        self._sessions = SessionCache(
            ApplicationKey(key_id, application_key),
            self._auth,
            storage=session_storage
        )
        self._clock = clock
        self._lease_ttl = lease_ttl
        self._leases: Dict[str, UploadLeaseCache] = {}
        self._leases_lock = threading.Lock()

    @staticmethod
    def create_config(
        proxy: Optional[str] = None,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
        **kwargs
    ) -> APIConfig:
        """
        Create an APIConfig from common options.

        Args:
            proxy: Proxy URL (e.g. "http://proxy:8080")
            timeout: Total request timeout in seconds
            user_agent: Custom User-Agent header
            **kwargs: Extra APIConfig fields
        """
        if proxy:
            kwargs['proxy'] = ProxyConfig(url=proxy)
        if timeout:
            kwargs['timeout'] = TimeoutConfig(total=timeout)
        if user_agent:
            kwargs['user_agent'] = user_agent
        return APIConfig(**kwargs)

    @property
    def config(self) -> APIConfig:
        return self._config

    @property
    def api(self) -> AsyncAPIClient:
        """Underlying API transport."""
        return self._api

    @property
    def sessions(self) -> SessionCache:
        """Account session cache."""
        return self._sessions

    async def __aenter__(self) -> 'B2Client':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Close the HTTP transport."""
        await self._api.close()

    # Session

    async def authorize(self) -> AuthorizedSession:
        """Get the account session, authorizing if none is cached."""
        return await self._sessions.get_or_authorize()

    def invalidate_session(self) -> None:
        """Forget the cached session; the next call re-authorizes."""
        self._sessions.invalidate()

    def lease_cache(self, bucket_id: str) -> UploadLeaseCache:
        """
        Get the upload lease cache of a bucket, creating it on first use.

        Args:
            bucket_id: Bucket id
        """
        with self._leases_lock:
            cache = self._leases.get(bucket_id)
            if cache is None:
                cache = UploadLeaseCache(
                    bucket_id,
                    self._api,
                    self._sessions,
                    clock=self._clock,
                    ttl=self._lease_ttl
                )
                self._leases[bucket_id] = cache
            return cache

    # Buckets

    async def list_buckets(self, options: Optional[ListBucketsConfig] = None) -> List[Bucket]:
        """
        List buckets of the account.

        Args:
            options: Optional id/name filters

        Returns:
            Bucket handles
        """
        session = await self._sessions.get_or_authorize()
        try:
            result = await self._api.list_buckets(session, options)
        except B2APIError as e:
            self._on_session_error(session, e)
            raise
        return [Bucket(self, info) for info in result.buckets]

    async def get_bucket(self, bucket_name: str) -> Optional[Bucket]:
        """
        Find a bucket by exact name.

        Returns:
            Bucket handle or None if the account has no such bucket
        """
        buckets = await self.list_buckets(ListBucketsConfig(bucket_name=bucket_name))
        for bucket in buckets:
            if bucket.name == bucket_name:
                return bucket
        return None

    # Files

    async def upload_file(
        self,
        bucket_id: str,
        source: ContentSource,
        file_name: str
    ) -> UploadedFile:
        """
        Upload content into a bucket.

        Args:
            bucket_id: Destination bucket id
            source: Raw bytes or a file path
            file_name: Destination file name

        Returns:
            Uploaded file record
        """
        coordinator = UploadCoordinator(self._api, self.lease_cache(bucket_id))
        return await coordinator.upload(source, file_name)

    async def list_file_names(
        self,
        options: ListFileNamesConfig
    ) -> Tuple[List[UploadedFile], Optional[str]]:
        """
        List one page of file names.

        Args:
            options: Bucket id and paging options

        Returns:
            Tuple of (files, next file name or None on the last page)
        """
        result = await self.list_file_names_page(options)
        return result.uploaded_files, result.next_file_name

    async def list_file_names_page(self, options: ListFileNamesConfig) -> ListFileNamesResult:
        """List one page of file names with the full file records."""
        session = await self._sessions.get_or_authorize()
        try:
            return await self._api.list_file_names(session, options)
        except B2APIError as e:
            self._on_session_error(session, e)
            raise

    def _on_session_error(self, session: AuthorizedSession, error: B2APIError) -> None:
        if error.is_auth_error:
            self._logger.info(f"Account token rejected ({error.kind.name}), dropping session")
            self._sessions.invalidate(session)
