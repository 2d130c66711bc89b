"""
Upload module for B2 file uploads.

Leases per-bucket upload endpoints and sends single-request uploads.
"""
from .coordinator import UploadCoordinator
from .lease_cache import UploadLeaseCache
from ..models import (
    AUTO_CONTENT_TYPE,
    LEASE_TTL,
    FileVersion,
    UploadedFile,
    UploadLease,
)

__all__ = [
    'UploadCoordinator',
    'UploadLeaseCache',
    'AUTO_CONTENT_TYPE',
    'LEASE_TTL',
    'FileVersion',
    'UploadedFile',
    'UploadLease',
]
