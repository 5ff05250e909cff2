"""
Upload a file to a resumable upload endpoint
"""
import asyncio
from tusupload import TusClient, setup_logging


async def main():
    setup_logging()

    async with TusClient("http://localhost:8082/upload") as client:

        # Simple upload
        result = await client.upload("video.mp4")
        print(f"Uploaded: {result.resource_id} ({result.chunks_sent} chunks)")

        # Upload with display name and extra creation fields
        result = await client.upload(
            "clip.mp4",
            name="holiday_2024.mp4",
            metadata={'description': "Holiday clip", 'distributor': "family"}
        )
        print(f"Uploaded as: {result.resource_id}")

        # Upload with progress callback
        def on_progress(progress):
            print(f"Progress: {progress.percentage:.1f}% (chunk {progress.chunk_size // 1024} KB)")

        await client.upload("large_file.mkv", progress_callback=on_progress)


if __name__ == "__main__":
    asyncio.run(main())
