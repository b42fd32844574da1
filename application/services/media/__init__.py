"""Media helpers: debounced YouTube video ID validation."""

from .debounce import Debouncer
from .video_probe import (
    ProbeOutcome,
    VideoCheckResult,
    VideoIdValidator,
    is_valid_video_id_format,
    probe_video_exists,
)

__all__ = [
    "Debouncer",
    "ProbeOutcome",
    "VideoCheckResult",
    "VideoIdValidator",
    "is_valid_video_id_format",
    "probe_video_exists",
]
