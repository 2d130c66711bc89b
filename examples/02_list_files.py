"""
List the files of a B2 bucket, one page at a time.

    python examples/02_list_files.py <key-id> <application-key> <bucket>
"""
import asyncio
import logging
import sys

from blazepy import B2Client


async def main(key_id: str, secret: str, bucket_name: str):
    async with B2Client(key_id, secret) as b2:
        bucket = await b2.get_bucket(bucket_name)
        if bucket is None:
            print(f"Bucket does not exist: {bucket_name}")
            return 1

        files, next_file_name = await bucket.list_files(max_file_count=100)
        for f in files:
            print(f)

        # Keep paging until the last page
        while next_file_name is not None:
            files, next_file_name = await bucket.list_files(
                start_file_name=next_file_name, max_file_count=100
            )
            for f in files:
                print(f)

        return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    sys.exit(asyncio.run(main(*sys.argv[1:4])))
