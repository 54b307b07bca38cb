from datetime import datetime
from pathlib import Path

import aiofiles
from aiofiles import os as aos

from ..compress import compress_file
from ..utils import log, format_filesize

MB = 1024 * 1024


class SegmentFileWriter:
    """
    Appends segment bytes to ``<pattern>.ts`` files for one channel.

    A new file is started when the configured duration or size limit is reached
    (0 disables a limit). Finished files are handed to the compression pipeline.
    """

    def __init__(
        self,
        username: str,
        pattern: str,
        max_duration_min: int = 0,
        max_filesize_mb: int = 0,
        compress: bool = False,
    ):
        self.username = username
        self.pattern = pattern
        self.max_duration_sec = max_duration_min * 60
        self.max_filesize = max_filesize_mb * MB
        self.compress = compress

        self.sequence = 0
        self.file_path: str | None = None
        self.file_size = 0
        self.file_duration = 0.0
        self.__file = None

    async def write(self, b: bytes, duration: float):
        if self.__file is None:
            await self.__open()
        assert self.__file is not None

        await self.__file.write(b)
        self.file_size += len(b)
        self.file_duration += duration

        if self.__should_rotate():
            await self.close()
            self.sequence += 1

    async def close(self):
        if self.__file is None:
            return
        await self.__file.close()
        self.__file = None
        file_path = self.file_path
        assert file_path is not None

        attr = {
            "username": self.username,
            "filename": Path(file_path).name,
            "size": format_filesize(self.file_size),
            "duration": round(self.file_duration, 2),
        }
        if self.file_size == 0:
            await aos.remove(file_path)
            log.debug("Remove empty file", attr)
            return

        log.info("Close file", attr)
        if self.compress:
            compress_file(file_path)

    def render_filename(self, now: datetime) -> str:
        name = self.pattern.format(
            username=self.username,
            year=now.strftime("%Y"),
            month=now.strftime("%m"),
            day=now.strftime("%d"),
            hour=now.strftime("%H"),
            minute=now.strftime("%M"),
            second=now.strftime("%S"),
            sequence=self.sequence,
        )
        if self.sequence > 0 and "{sequence}" not in self.pattern:
            name = f"{name}_{self.sequence}"
        return name

    async def __open(self):
        now = datetime.now()
        name = self.render_filename(now)
        # never reuse a name whose capture or compressed output is still on disk
        while await self.__is_taken(name):
            self.sequence += 1
            name = self.render_filename(now)

        file_path = f"{name}.ts"
        parent = Path(file_path).parent
        await aos.makedirs(parent, exist_ok=True)

        self.__file = await aiofiles.open(file_path, "xb")
        self.file_path = file_path
        self.file_size = 0
        self.file_duration = 0.0
        log.info("Open file", {"username": self.username, "filename": Path(file_path).name})

    async def __is_taken(self, name: str) -> bool:
        return await aos.path.exists(f"{name}.ts") or await aos.path.exists(f"{name}.mkv")

    def __should_rotate(self) -> bool:
        if 0 < self.max_duration_sec <= self.file_duration:
            return True
        if 0 < self.max_filesize <= self.file_size:
            return True
        return False
