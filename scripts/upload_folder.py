"""Script to upload every supported file in a folder to a running service."""

import asyncio
import mimetypes
import sys
from pathlib import Path

import httpx

SUPPORTED_EXTENSIONS = {".pdf", ".docx", ".txt", ".md"}


async def upload_folder(folder: Path, base_url: str = "http://localhost:8000") -> None:
    """Upload files one at a time, as the UI does."""
    files = sorted(
        p for p in folder.iterdir()
        if p.is_file() and p.suffix.lower() in SUPPORTED_EXTENSIONS
    )
    failed = 0

    async with httpx.AsyncClient(base_url=base_url, timeout=None) as client:
        for path in files:
            content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
            response = await client.post(
                "/documents",
                files={"file": (path.name, path.read_bytes(), content_type)},
            )
            if response.status_code != 200:
                print(f"{path.name}: HTTP {response.status_code} {response.text}")
                failed += 1
                continue
            body = response.json()
            if body["error"]:
                print(f"{path.name}: {body['error']}")
                failed += 1
            else:
                print(f"Stored document: {path.name}")

    print(f"\nUploaded {len(files) - failed} of {len(files)} files")


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("usage: upload_folder.py FOLDER [BASE_URL]")
        sys.exit(2)
    asyncio.run(upload_folder(Path(sys.argv[1]), *sys.argv[2:3]))
