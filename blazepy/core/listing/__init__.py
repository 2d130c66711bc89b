"""Bucket and file name listing models."""
from .models import (
    BucketInfo,
    ListBucketsConfig,
    ListBucketsResult,
    ListFileNamesConfig,
    ListFileNamesResult,
)

__all__ = [
    'BucketInfo',
    'ListBucketsConfig',
    'ListBucketsResult',
    'ListFileNamesConfig',
    'ListFileNamesResult',
]
