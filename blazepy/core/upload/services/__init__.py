"""Upload services module."""
from .file_service import FileValidator, AsyncFileReader
from .hash_service import ContentHasher, content_sha1

__all__ = [
    'FileValidator',
    'AsyncFileReader',
    'ContentHasher',
    'content_sha1',
]
