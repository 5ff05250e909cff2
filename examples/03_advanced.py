"""
Custom configuration and continuing a failed upload
"""
import asyncio
from tusupload import TusClient, UploadError


async def main():
    config = TusClient.create_config(
        "https://media.example.com/upload",
        timeout=30,
        max_retries=5,
        backoff=True,
        chunk_size=512 * 1024
    )

    async with TusClient(config=config) as client:
        try:
            result = await client.upload("video.mp4")
        except UploadError as e:
            print(f"Failed at offset {e.offset}: {e}")
            if not e.resource_id:
                raise

            # Ask the server how far it got, then continue the same resource
            held = await client.get_offset(e.resource_id)
            print(f"Server holds {held} bytes, continuing")
            result = await client.upload("video.mp4", resource_id=e.resource_id)

        print(f"Uploaded: {result.resource_id}")


if __name__ == "__main__":
    asyncio.run(main())
