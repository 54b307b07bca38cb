import subprocess
import threading
from dataclasses import dataclass
from typing import Callable

from ..utils import log


@dataclass(frozen=True)
class VideoEncoder:
    name: str
    codec: str
    args: tuple[str, ...] = ()


# Hardware encoders in priority order, CPU fallback last
VIDEO_ENCODERS: tuple[VideoEncoder, ...] = (
    # NVIDIA NVENC, cq scale is 0-51 (higher = smaller file)
    VideoEncoder("NVENC", "h264_nvenc", ("-preset", "p4", "-rc", "vbr", "-cq", "30", "-b:v", "0")),
    # AMD AMF
    VideoEncoder("AMF", "h264_amf", ("-quality", "balanced", "-rc", "vbr_latency", "-qp_i", "28", "-qp_p", "28")),
    # Intel Quick Sync
    VideoEncoder("QSV", "h264_qsv", ("-preset", "medium", "-global_quality", "28")),
    # macOS VideoToolbox
    VideoEncoder("VideoToolbox", "h264_videotoolbox", ("-q:v", "65")),
    VideoEncoder("CPU", "libx264", ("-preset", "medium", "-crf", "23")),
)

PROBE_TIMEOUT_SEC = 30


def probe_encoder(encoder: VideoEncoder) -> bool:
    """Runs a 1 second synthetic encode to check the codec works on this host."""
    command = [
        "ffmpeg",
        "-hide_banner",
        "-f",
        "lavfi",
        "-i",
        "nullsrc=s=256x256:d=1",
        "-c:v",
        encoder.codec,
        "-f",
        "null",
        "-",
    ]
    try:
        result = subprocess.run(
            command,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            timeout=PROBE_TIMEOUT_SEC,
        )
    except (OSError, subprocess.TimeoutExpired):
        return False
    return result.returncode == 0


class EncoderSelector:
    """
    Picks the first usable encoder from a priority list and remembers it.

    The probe sequence runs at most once per instance, no matter how many threads
    or event loop tasks ask for the encoder concurrently.
    """

    def __init__(
        self,
        candidates: tuple[VideoEncoder, ...] = VIDEO_ENCODERS,
        probe: Callable[[VideoEncoder], bool] = probe_encoder,
    ):
        if len(candidates) == 0:
            raise ValueError("At least one encoder candidate is required")
        self.__candidates = candidates
        self.__probe = probe
        self.__lock = threading.Lock()
        self.__selected: VideoEncoder | None = None

    def get(self) -> VideoEncoder:
        selected = self.__selected
        if selected is not None:
            return selected
        with self.__lock:
            if self.__selected is None:
                self.__selected = self.__detect()
            return self.__selected

    def __detect(self) -> VideoEncoder:
        for encoder in self.__candidates:
            if self.__probe(encoder):
                log.info("Detected video encoder", {"encoder": encoder.name, "codec": encoder.codec})
                return encoder
        fallback = self.__candidates[-1]
        log.warn("No encoder passed the probe, using fallback", {"encoder": fallback.name})
        return fallback


default_selector = EncoderSelector()


def get_encoder() -> VideoEncoder:
    return default_selector.get()
