"""
Bucket - handle to one B2 bucket.
"""
from dataclasses import replace
from typing import TYPE_CHECKING, AsyncIterator, List, Optional, Tuple

from .core.listing import BucketInfo, ListFileNamesConfig
from .core.upload import UploadedFile
from .core.upload.coordinator import ContentSource

if TYPE_CHECKING:
    from .client import B2Client


class Bucket:
    """
    Handle to a bucket, bound to the client that listed it.

    Uploads through any handle of the same bucket share the client's
    lease cache for that bucket.

    Example:
        >>> bucket = await client.get_bucket("photos")
        >>> await bucket.upload_file(b"hello", "hello.txt")
        >>> async for f in bucket.iter_files(prefix="pets/"):
        ...     print(f.name)
    """

    def __init__(self, client: 'B2Client', info: BucketInfo):
        self._client = client
        self._info = info

    @property
    def id(self) -> str:
        return self._info.bucket_id

    @property
    def name(self) -> str:
        return self._info.bucket_name

    @property
    def account_id(self) -> str:
        return self._info.account_id

    @property
    def bucket_type(self) -> Optional[str]:
        return self._info.bucket_type

    @property
    def info(self) -> BucketInfo:
        return self._info

    async def upload_file(self, source: ContentSource, file_name: str) -> UploadedFile:
        """
        Upload content into this bucket.

        Args:
            source: Raw bytes or a file path
            file_name: Destination file name
        """
        return await self._client.upload_file(self.id, source, file_name)

    async def list_files(
        self,
        start_file_name: Optional[str] = None,
        max_file_count: Optional[int] = None,
        prefix: Optional[str] = None,
        delimiter: Optional[str] = None
    ) -> Tuple[List[UploadedFile], Optional[str]]:
        """
        List one page of file names.

        Returns:
            Tuple of (files, next file name or None on the last page)
        """
        options = ListFileNamesConfig(
            bucket_id=self.id,
            start_file_name=start_file_name,
            max_file_count=max_file_count,
            prefix=prefix,
            delimiter=delimiter
        )
        return await self._client.list_file_names(options)

    async def iter_files(
        self,
        prefix: Optional[str] = None,
        delimiter: Optional[str] = None,
        page_size: Optional[int] = None
    ) -> AsyncIterator[UploadedFile]:
        """
        Iterate over every file name, following nextFileName across pages.

        Args:
            prefix: Only yield names starting with this prefix
            delimiter: Collapse names after this delimiter into folders
            page_size: Files requested per page
        """
        options = ListFileNamesConfig(
            bucket_id=self.id,
            max_file_count=page_size,
            prefix=prefix,
            delimiter=delimiter
        )
        while True:
            files, next_file_name = await self._client.list_file_names(options)
            for f in files:
                yield f
            if next_file_name is None:
                break
            options = replace(options, start_file_name=next_file_name)

    def __repr__(self) -> str:
        return f"Bucket(name={self.name!r}, id={self.id!r})"
