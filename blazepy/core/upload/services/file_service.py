"""
File validation and reading services.

Single Responsibility: Each class handles one specific task.
"""
from pathlib import Path
from typing import Tuple, Union
import logging
import aiofiles

from .hash_service import ContentHasher


class FileValidator:
    """
    Validates files before upload.
    
    Responsibilities:
    - Check file existence
    - Verify file is not a directory
    - Get file size
    """
    
    def validate(self, file_path: Union[str, Path]) -> Tuple[Path, int]:
        """
        Validate a file for upload.
        
        Args:
            file_path: Path to the file
            
        Returns:
            Tuple of (validated Path, file size in bytes)
            
        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If path is not a regular file
        """
        path = Path(file_path) if isinstance(file_path, str) else file_path
        
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        
        if not path.is_file():
            raise ValueError(f"Path is not a file: {path}")
        
        file_size = path.stat().st_size
        
        return path, file_size


class AsyncFileReader:
    """
    Asynchronous whole-file reader.
    
    Uses aiofiles for non-blocking I/O operations. Content is read in
    blocks and hashed as it arrives, so the digest is ready when the
    read finishes.
    """
    
    BLOCK_SIZE = 1024 * 1024
    
    def __init__(self, block_size: int = BLOCK_SIZE):
        """
        Initialize file reader.
        
        Args:
            block_size: Bytes read per await
        """
        self._block_size = block_size
        self._logger = logging.getLogger('blazepy.upload.file')
    
    async def read_file(self, file_path: Path) -> Tuple[bytes, str]:
        """
        Read an entire file and hash it.
        
        Args:
            file_path: Path to the file
            
        Returns:
            Tuple of (file content, lowercase hex SHA-1)
            
        Raises:
            OSError: If the file cannot be read
        """
        hasher = ContentHasher()
        blocks = []
        async with aiofiles.open(file_path, 'rb') as f:
            while True:
                block = await f.read(self._block_size)
                if not block:
                    break
                hasher.update(block)
                blocks.append(block)
        
        self._logger.debug(f"Read {hasher.size} bytes from {file_path}")
        return b''.join(blocks), hasher.hexdigest()
