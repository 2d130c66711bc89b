"""
Upload coordinator.

Orchestrates a single-request upload: lease, read, hash, send, decode.
"""
import time
from pathlib import Path
from typing import Optional, Tuple, Union

from .lease_cache import UploadLeaseCache
from ..models import UploadedFile, UploadLease
from .services import AsyncFileReader, FileValidator, content_sha1
from ..api.errors import B2APIError
from ..logging import get_logger

logger = get_logger('blazepy.upload')

ContentSource = Union[bytes, bytearray, memoryview, str, Path]


class UploadCoordinator:
    """
    Coordinates the upload of one file into one bucket.

    Uses dependency injection for all components, making it:
    - Testable (mock the API client)
    - Shareable (one lease cache per bucket across coordinators)

    An upload rejected with bad_auth_token or expired_auth_token drops the
    lease it used, so the next upload leases a fresh endpoint.
    """

    def __init__(
        self,
        api_client,
        lease_cache: UploadLeaseCache,
        file_reader: Optional[AsyncFileReader] = None
    ):
        """
        Initialize upload coordinator.

        Args:
            api_client: AsyncAPIClient used for the upload request
            lease_cache: Lease cache of the destination bucket
            file_reader: File reader implementation
        """
        self._api = api_client
        self._leases = lease_cache
        self._file_reader = file_reader or AsyncFileReader()
        self._validator = FileValidator()

    async def upload(self, source: ContentSource, file_name: str) -> UploadedFile:
        """
        Upload content under file_name.

        Args:
            source: Raw content, or the path of a file to read
            file_name: Destination file name

        Returns:
            Uploaded file record

        Raises:
            B2APIError: If leasing or uploading fails
            FileNotFoundError: If source is a path that doesn't exist
            ValueError: If source is a path that isn't a regular file
        """
        lease = await self._leases.get_or_refresh_lease()
        content, sha1 = await self._read_content(source)
        return await self._send(lease, content, sha1, file_name)

    async def upload_with_lease(
        self,
        lease: UploadLease,
        source: ContentSource,
        file_name: str
    ) -> UploadedFile:
        """
        Upload content using an already acquired lease.

        Args:
            lease: Valid upload lease
            source: Raw content, or the path of a file to read
            file_name: Destination file name

        Returns:
            Uploaded file record
        """
        content, sha1 = await self._read_content(source)
        return await self._send(lease, content, sha1, file_name)

    async def _read_content(self, source: ContentSource) -> Tuple[bytes, str]:
        if isinstance(source, (bytes, bytearray, memoryview)):
            content = bytes(source)
            return content, content_sha1(content)

        path, _ = self._validator.validate(source)
        return await self._file_reader.read_file(path)

    async def _send(
        self,
        lease: UploadLease,
        content: bytes,
        sha1: str,
        file_name: str
    ) -> UploadedFile:
        size_kb = len(content) / 1024
        logger.info(f"Uploading {file_name} ({size_kb:.1f} KB) to bucket {lease.bucket_id}")
        start = time.time()

        try:
            version = await self._api.upload_file(lease, file_name, content, sha1)
        except B2APIError as e:
            if e.is_auth_error:
                self._leases.invalidate(lease)
            logger.warning(f"Upload of {file_name} failed: {e.kind.name}: {e.message}")
            raise

        if version.content_sha1 and version.content_sha1 != sha1:
            logger.warning(
                f"Server SHA-1 {version.content_sha1} differs from local {sha1} for {file_name}"
            )

        uploaded = UploadedFile.from_file_version(version)
        logger.info(f"Uploaded {uploaded.name} in {time.time() - start:.2f}s: {uploaded.id}")
        return uploaded
