"""
Upload a file to a B2 bucket.

    python examples/01_upload_file.py <key-id> <application-key> <bucket> <file>
"""
import asyncio
import logging
import sys
from pathlib import Path

from blazepy import B2Client, B2APIError


async def main(key_id: str, secret: str, bucket_name: str, file_path: str):
    async with B2Client(key_id, secret) as b2:
        bucket = await b2.get_bucket(bucket_name)
        if bucket is None:
            print(f"Bucket does not exist: {bucket_name}")
            return 1

        try:
            uploaded = await bucket.upload_file(file_path, Path(file_path).name)
        except B2APIError as e:
            print(f"Upload failed ({e.kind.name}): {e.message}")
            return 1

        print(f"Uploaded: {uploaded}")
        return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    sys.exit(asyncio.run(main(*sys.argv[1:5])))
