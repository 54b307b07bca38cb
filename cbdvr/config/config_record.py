import os

from pydantic import BaseModel, constr, conint

from ..compress import has_ffmpeg

DEFAULT_PATTERN = "videos/{username}_{year}-{month}-{day}_{hour}-{minute}-{second}"


class RecordConfig(BaseModel):
    username: constr(min_length=1)
    resolution: conint(ge=1)
    framerate: conint(ge=1)
    pattern: constr(min_length=1)
    max_duration_min: conint(ge=0)
    max_filesize_mb: conint(ge=0)
    interval_min: conint(ge=1)
    compress: bool


def read_record_config() -> RecordConfig:
    return RecordConfig(
        username=os.getenv("CB_USERNAME"),  # type: ignore
        resolution=os.getenv("CB_RESOLUTION") or 1080,  # type: ignore
        framerate=os.getenv("CB_FRAMERATE") or 30,  # type: ignore
        pattern=os.getenv("CB_PATTERN") or DEFAULT_PATTERN,
        max_duration_min=os.getenv("CB_MAX_DURATION_MIN") or 0,  # type: ignore
        max_filesize_mb=os.getenv("CB_MAX_FILESIZE_MB") or 0,  # type: ignore
        interval_min=os.getenv("CB_INTERVAL_MIN") or 1,  # type: ignore
        compress=read_compress_flag(),  # type: ignore
    )


def read_compress_flag() -> str | bool:
    # compression is enabled by default when ffmpeg is installed
    return os.getenv("CB_COMPRESS") or has_ffmpeg()
