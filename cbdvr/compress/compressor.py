import asyncio
import os
import shutil
import subprocess
from pathlib import Path

from .encoder import VideoEncoder, get_encoder
from ..utils import log, error_dict, format_filesize

COMPRESS_TASK_PREFIX = "compress"
AUDIO_CODEC = "aac"
AUDIO_BITRATE = "128k"
OUTPUT_TAIL_CHARS = 500

_pending_tasks: set[asyncio.Task] = set()


def has_ffmpeg() -> bool:
    return shutil.which("ffmpeg") is not None


def compress_file(ts_path: str):
    """Schedules a background re-encode of ``ts_path``; results are only logged."""
    task_name = f"{COMPRESS_TASK_PREFIX}:{Path(ts_path).name}"
    task = asyncio.create_task(asyncio.to_thread(compress, ts_path), name=task_name)
    _pending_tasks.add(task)
    task.add_done_callback(_on_task_done)


def _on_task_done(task: asyncio.Task):
    _pending_tasks.discard(task)
    if task.cancelled():
        return
    ex = task.exception()
    if ex is not None:
        attr = error_dict(ex)
        attr["task_name"] = task.get_name()
        log.error("Compression task failed", attr)


async def wait_for_compressions():
    tasks = list(_pending_tasks)
    if len(tasks) == 0:
        return
    log.info("Wait for compression tasks", {"count": len(tasks)})
    await asyncio.gather(*tasks, return_exceptions=True)


def build_command(ts_path: str, mkv_path: str, encoder: VideoEncoder) -> list[str]:
    command = ["ffmpeg", "-y", "-i", ts_path, "-c:v", encoder.codec]
    command.extend(encoder.args)
    command.extend(["-c:a", AUDIO_CODEC, "-b:a", AUDIO_BITRATE, mkv_path])
    return command


def compress(ts_path: str, encoder: VideoEncoder | None = None) -> bool:
    """
    Re-encodes a finished ``.ts`` capture into ``.mkv`` next to it.

    The original is deleted only after ffmpeg exits successfully.
    Returns True if the encode succeeded.
    """
    mkv_path = str(Path(ts_path).with_suffix(".mkv"))
    ts_name = Path(ts_path).name
    mkv_name = Path(mkv_path).name

    try:
        ts_size = os.stat(ts_path).st_size
    except OSError as ex:
        log.error("Failed to stat file", _attr(ex, ts_name))
        return False

    if encoder is None:
        encoder = get_encoder()
    log.info(
        "Start compression",
        {"filename": ts_name, "size": format_filesize(ts_size), "encoder": encoder.name},
    )

    try:
        result = subprocess.run(
            build_command(ts_path, mkv_path, encoder),
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
        )
    except OSError as ex:
        log.error("Failed to run ffmpeg", _attr(ex, ts_name))
        return False
    if result.returncode != 0:
        output = result.stdout.decode("utf-8", errors="replace")
        log.error(
            "Failed to compress",
            {
                "filename": ts_name,
                "returncode": result.returncode,
                "ffmpeg_output": output[-OUTPUT_TAIL_CHARS:],
            },
        )
        return False

    try:
        mkv_size = os.stat(mkv_path).st_size
    except OSError as ex:
        log.error("Failed to stat compressed file", _attr(ex, mkv_name))
        return True
    ratio = mkv_size / ts_size * 100 if ts_size > 0 else 0.0

    try:
        os.remove(ts_path)
    except OSError as ex:
        log.error("Failed to delete original file", _attr(ex, ts_name))
        return True

    log.info(
        "Finish compression",
        {
            "filename": ts_name,
            "output": mkv_name,
            "size": format_filesize(mkv_size),
            "ratio": f"{ratio:.1f}%",
        },
    )
    return True


def _attr(ex: BaseException, filename: str) -> dict:
    attr = error_dict(ex)
    attr["filename"] = filename
    return attr
