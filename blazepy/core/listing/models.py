"""
Listing request options and results.

Options are plain dataclasses; unset fields are left out of the request.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..models import FileVersion, UploadedFile


@dataclass
class ListBucketsConfig:
    """
    Filters for b2_list_buckets.

    Attributes:
        bucket_id: Only list the bucket with this id
        bucket_name: Only list the bucket with this name
    """
    bucket_id: Optional[str] = None
    bucket_name: Optional[str] = None

    def to_request(self, account_id: str) -> Dict[str, Any]:
        """Build the JSON request body."""
        body: Dict[str, Any] = {'accountId': account_id}
        if self.bucket_id is not None:
            body['bucketId'] = self.bucket_id
        if self.bucket_name is not None:
            body['bucketName'] = self.bucket_name
        return body


@dataclass
class ListFileNamesConfig:
    """
    Options for b2_list_file_names.

    Attributes:
        bucket_id: Bucket to list
        start_file_name: First file name to return (pagination cursor)
        max_file_count: Maximum number of files per page
        prefix: Only return names starting with this prefix
        delimiter: Collapse names after this delimiter into folders
    """
    bucket_id: str
    start_file_name: Optional[str] = None
    max_file_count: Optional[int] = None
    prefix: Optional[str] = None
    delimiter: Optional[str] = None

    def __post_init__(self):
        if self.max_file_count is not None and self.max_file_count < 1:
            raise ValueError("max_file_count must be positive")

    def to_params(self) -> Dict[str, str]:
        """Build the query string parameters."""
        params = {'bucketId': self.bucket_id}
        if self.start_file_name is not None:
            params['startFileName'] = self.start_file_name
        if self.max_file_count is not None:
            params['maxFileCount'] = str(self.max_file_count)
        if self.prefix is not None:
            params['prefix'] = self.prefix
        if self.delimiter is not None:
            params['delimiter'] = self.delimiter
        return params


@dataclass(frozen=True)
class BucketInfo:
    """Bucket entry from b2_list_buckets."""
    account_id: str
    bucket_id: str
    bucket_name: str
    bucket_type: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BucketInfo':
        return cls(
            account_id=data['accountId'],
            bucket_id=data['bucketId'],
            bucket_name=data['bucketName'],
            bucket_type=data.get('bucketType'),
        )


@dataclass(frozen=True)
class ListBucketsResult:
    """Decoded b2_list_buckets response."""
    buckets: List[BucketInfo] = field(default_factory=list)

    @classmethod
    def from_response(cls, data: Dict[str, Any]) -> 'ListBucketsResult':
        return cls(buckets=[BucketInfo.from_dict(b) for b in data['buckets']])


@dataclass(frozen=True)
class ListFileNamesResult:
    """
    Decoded b2_list_file_names response.

    Attributes:
        files: One page of file records
        next_file_name: Cursor for the next page, None on the last page
    """
    files: List[FileVersion] = field(default_factory=list)
    next_file_name: Optional[str] = None

    @classmethod
    def from_response(cls, data: Dict[str, Any]) -> 'ListFileNamesResult':
        return cls(
            files=[FileVersion.from_dict(f) for f in data['files']],
            next_file_name=data.get('nextFileName'),
        )

    @property
    def uploaded_files(self) -> List[UploadedFile]:
        """Files of this page as UploadedFile records."""
        return [UploadedFile.from_file_version(f) for f in self.files]
