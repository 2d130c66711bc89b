"""
blazepy - Async Python client for Backblaze B2 cloud storage.

Usage:
    >>> from blazepy import B2Client
    >>> 
    >>> async with B2Client(key_id, application_key) as b2:
    ...     bucket = await b2.get_bucket("photos")
    ...     uploaded = await bucket.upload_file("cat.jpg", "pets/cat.jpg")
"""
import logging
from .client import B2Client
from .bucket import Bucket

# Configuration
from .core.api import (
    APIConfig,
    ProxyConfig,
    TimeoutConfig,
    AsyncAPIClient,
    AsyncAuthService,
)

# Errors
from .core.exceptions import BlazeException
from .core.api import B2APIError, ErrorClassifier, ErrorKind

# Session and upload state
from .core.session import (
    ApplicationKey,
    AuthorizedSession,
    SessionStorage,
    MemorySession,
    SessionCache,
)
from .core.upload import (
    LEASE_TTL,
    UploadCoordinator,
    UploadedFile,
    UploadLease,
    UploadLeaseCache,
)
from .core.listing import BucketInfo, ListBucketsConfig, ListFileNamesConfig

__version__ = '0.1.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for blazepy modules.
    
    Loggers created before the root logger had handlers are pinned at
    WARNING by get_logger; this resets every blazepy logger to level.
    
    Args:
        level: Logging level (default: logging.INFO)
    """
    loggers = {
        'blazepy',
        'blazepy.client',
        'blazepy.api',
        'blazepy.errors',
        'blazepy.session',
        'blazepy.upload',
        'blazepy.upload.lease',
        'blazepy.upload.file',
    }
    loggers.update(
        name for name in logging.Logger.manager.loggerDict
        if name.startswith('blazepy.')
    )
    
    for logger_name in sorted(loggers):
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True


__all__ = [
    'B2Client',
    'Bucket',
    'APIConfig',
    'ProxyConfig',
    'TimeoutConfig',
    'AsyncAPIClient',
    'AsyncAuthService',
    'BlazeException',
    'B2APIError',
    'ErrorClassifier',
    'ErrorKind',
    'ApplicationKey',
    'AuthorizedSession',
    'SessionStorage',
    'MemorySession',
    'SessionCache',
    'LEASE_TTL',
    'UploadCoordinator',
    'UploadedFile',
    'UploadLease',
    'UploadLeaseCache',
    'BucketInfo',
    'ListBucketsConfig',
    'ListFileNamesConfig',
    'setup_logging',
]
