"""
Data models shared by uploads and listings.

Uses dataclasses for immutable, type-safe data structures. Kept free of
package imports so both the transport and the upload services can use it.
"""
from dataclasses import dataclass, field
from typing import Dict, Any, Optional

# Upload URLs are valid for 24 hours (86,400,000 ms)
LEASE_TTL = 86_400.0

AUTO_CONTENT_TYPE = 'b2/x-auto'


@dataclass(frozen=True)
class UploadLease:
    """
    Time-bounded right to use one upload endpoint of a bucket.

    Attributes:
        bucket_id: Bucket the endpoint uploads into
        url: Upload URL
        token: Authorization token for the upload URL
        issued_at: Issue time as Unix timestamp (seconds)
    """
    bucket_id: str
    url: str
    token: str = field(repr=False)
    issued_at: float = 0.0

    def is_valid(self, now: float, ttl: float = LEASE_TTL) -> bool:
        """Returns True while the lease is younger than ttl."""
        return now - self.issued_at < ttl

    @classmethod
    def from_upload_url_response(
        cls,
        data: Dict[str, Any],
        bucket_id: str,
        issued_at: float
    ) -> 'UploadLease':
        """
        Create from a b2_get_upload_url response body.

        The body carries only uploadUrl and authorizationToken; the bucket
        comes from the request.

        Args:
            data: Decoded JSON response
            bucket_id: Bucket the upload URL was requested for
            issued_at: Time the lease was requested

        Raises:
            KeyError: If a required field is missing
        """
        return cls(
            bucket_id=bucket_id,
            url=data['uploadUrl'],
            token=data['authorizationToken'],
            issued_at=issued_at,
        )


@dataclass(frozen=True)
class FileVersion:
    """
    Full file record as returned by b2_upload_file and b2_list_file_names.

    Attributes:
        account_id: Owning account
        bucket_id: Bucket holding the file
        file_id: Server-assigned file id
        file_name: File name
        content_length: Size in bytes
        upload_timestamp: Upload time in milliseconds since epoch
        content_sha1: Hex SHA-1 (absent for some large files)
        content_md5: Hex MD5, if known
        content_type: MIME type, if known
    """
    account_id: str
    bucket_id: str
    file_id: str
    file_name: str
    content_length: int
    upload_timestamp: int
    content_sha1: Optional[str] = None
    content_md5: Optional[str] = None
    content_type: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FileVersion':
        """
        Create from a B2 file JSON object.

        Raises:
            KeyError: If a required field is missing
        """
        return cls(
            account_id=data['accountId'],
            bucket_id=data['bucketId'],
            file_id=data['fileId'],
            file_name=data['fileName'],
            content_length=int(data['contentLength']),
            upload_timestamp=int(data['uploadTimestamp']),
            content_sha1=data.get('contentSha1'),
            content_md5=data.get('contentMd5'),
            content_type=data.get('contentType'),
        )


@dataclass(frozen=True)
class UploadedFile:
    """
    Result of a successful upload.

    Attributes:
        id: Server-assigned file id
        name: Confirmed file name
        size: Size in bytes
        upload_timestamp: Upload time in milliseconds since epoch
    """
    id: str
    name: str
    size: int
    upload_timestamp: int

    @classmethod
    def from_response(cls, data: Dict[str, Any]) -> 'UploadedFile':
        """Create from a b2_upload_file response body."""
        return cls.from_file_version(FileVersion.from_dict(data))

    @classmethod
    def from_file_version(cls, version: FileVersion) -> 'UploadedFile':
        return cls(
            id=version.file_id,
            name=version.file_name,
            size=version.content_length,
            upload_timestamp=version.upload_timestamp,
        )
