from .compressor import compress, compress_file, wait_for_compressions, has_ffmpeg, build_command
from .encoder import VideoEncoder, VIDEO_ENCODERS, EncoderSelector, get_encoder, probe_encoder
