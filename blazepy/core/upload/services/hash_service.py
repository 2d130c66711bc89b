"""
Content hashing service.

B2 verifies every upload against the SHA-1 sent in X-Bz-Content-Sha1.
"""
from typing import Union

from Crypto.Hash import SHA1


def content_sha1(data: Union[bytes, bytearray, memoryview]) -> str:
    """
    Compute the lowercase hex SHA-1 of data.

    Args:
        data: Content to hash (may be empty)

    Returns:
        40-character lowercase hex digest
    """
    return SHA1.new(bytes(data)).hexdigest()


class ContentHasher:
    """
    Incremental SHA-1 over content fed in pieces.

    Example:
        >>> hasher = ContentHasher().update(b"abc")
        >>> hasher.hexdigest()
        'a9993e364706816aba3e25717850c26c9cd0d89d'
    """

    def __init__(self):
        self._hash = SHA1.new()
        self._size = 0

    def update(self, data: bytes) -> 'ContentHasher':
        self._hash.update(data)
        self._size += len(data)
        return self

    @property
    def size(self) -> int:
        """Number of bytes hashed so far."""
        return self._size

    def hexdigest(self) -> str:
        return self._hash.hexdigest()
