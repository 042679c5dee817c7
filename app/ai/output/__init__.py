"""
Output Module - Turning generated content into something a client can render.

- segmenter: prose / fenced-code partitioning of generated text
- copy_tracker: transient "copied" indicators per segment
- download: image filename synthesis and data URL handling
"""

from app.ai.output.copy_tracker import COPY_ALL_ID, CopyTracker
from app.ai.output.download import build_data_url, build_download_filename, decode_data_url
from app.ai.output.segmenter import ContentSegment, SegmentKind, segment_content

__all__ = [
    "COPY_ALL_ID",
    "CopyTracker",
    "build_data_url",
    "build_download_filename",
    "decode_data_url",
    "ContentSegment",
    "SegmentKind",
    "segment_content",
]
