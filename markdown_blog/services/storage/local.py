"""
Local filesystem storage implementation.

Artifacts are written to a sibling temporary file and moved into place, so
a concurrent reader sees either the previous or the new content of a file,
never a partial write.
"""

from pathlib import Path
from uuid import uuid4

import aiofiles
import aiofiles.os


class LocalStorage:
    """Filesystem backend rooted at an optional base directory."""

    writable = True

    def __init__(self, base_dir: Path | str | None = None) -> None:
        """
        Initialize local storage.

        Args:
            base_dir: Directory that relative roots are resolved against.
                Absolute roots are used as-is.
        """
        self.base_dir = Path(base_dir) if base_dir is not None else None

    def _get_file_path(self, root: str, name: str = "") -> Path:
        root_path = Path(root)
        if self.base_dir is not None and not root_path.is_absolute():
            root_path = self.base_dir / root_path
        return root_path / name if name else root_path

    async def read_bytes(self, root: str, name: str) -> bytes | None:
        file_path = self._get_file_path(root, name)
        if not await aiofiles.os.path.isfile(file_path):
            return None
        async with aiofiles.open(file_path, "rb") as f:
            return await f.read()

    async def write_bytes(self, root: str, name: str, data: bytes) -> None:
        file_path = self._get_file_path(root, name)
        await aiofiles.os.makedirs(file_path.parent, exist_ok=True)

        tmp_path = file_path.with_name(f".{file_path.name}.{uuid4().hex}.tmp")
        try:
            async with aiofiles.open(tmp_path, "wb") as f:
                await f.write(data)
            await aiofiles.os.replace(tmp_path, file_path)
        finally:
            if await aiofiles.os.path.exists(tmp_path):
                await aiofiles.os.remove(tmp_path)

    async def exists(self, root: str, name: str) -> bool:
        return await aiofiles.os.path.isfile(self._get_file_path(root, name))

    async def delete(self, root: str, name: str) -> bool:
        file_path = self._get_file_path(root, name)
        if not await aiofiles.os.path.isfile(file_path):
            return False
        await aiofiles.os.remove(file_path)
        return True

    async def list_names(self, root: str, directory: str = "") -> list[str]:
        dir_path = self._get_file_path(root, directory)
        if not await aiofiles.os.path.isdir(dir_path):
            return []
        return sorted(await aiofiles.os.listdir(dir_path))
