"""
Pause an upload and resume it at the same offset
"""
import asyncio
from tusupload import TusClient, UploadState


async def main():
    async with TusClient("http://localhost:8082/upload") as client:
        session, target = client.create_session("large_file.mkv")

        session.on('state', lambda old, new: print(f"{old.value} -> {new.value}"))

        task = asyncio.create_task(session.start(target))
        await asyncio.sleep(1.0)

        # Takes effect once the chunk in flight is confirmed
        session.pause()
        result = await task
        print(f"Paused at {result.offset}/{result.file_size}")

        if result.state == UploadState.PAUSED:
            result = await session.resume()
        print(f"Finished: {result.resource_id} in state {result.state.value}")


if __name__ == "__main__":
    asyncio.run(main())
