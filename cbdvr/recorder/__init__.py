from .channel_recorder import ChannelRecorder
from .file_writer import SegmentFileWriter
