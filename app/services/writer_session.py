"""
Writer Session - Transient per-user state between requests.

Holds exactly what the client needs to re-render the output area:
- the last request and its result (text segments or image)
- the related-topics follow-up (pending task, topics or error)
- the "copied" indicators

Nothing is merged across generations: starting a new one wipes all of it.
The `is_loading` flag is the cooperative single-flight guard; the
generation service refuses to start while it is set.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from app.ai.output.copy_tracker import CopyTracker
from app.ai.output.segmenter import ContentSegment, segment_content
from app.ai.schemas.generation import (
    GenerationRequest,
    GenerationResult,
    RelatedTopicsResult,
    TextResult,
)

logger = logging.getLogger(__name__)


@dataclass
class WriterSession:
    username: str
    request: Optional[GenerationRequest] = None
    result: Optional[GenerationResult] = None
    segments: List[ContentSegment] = field(default_factory=list)
    is_loading: bool = False
    copy_tracker: CopyTracker = field(default_factory=CopyTracker)
    _related_task: Optional["asyncio.Task[RelatedTopicsResult]"] = field(default=None, repr=False)

    # -----------------------------------------------------------------------
    # LIFECYCLE
    # -----------------------------------------------------------------------

    def begin(self, request: GenerationRequest) -> None:
        """Clear the previous output and enter the loading state."""
        self.request = request
        self.result = None
        self.segments = []
        self._related_task = None
        self.copy_tracker.reset()
        self.is_loading = True

    def finish(self, result: GenerationResult) -> None:
        self.result = result
        self.segments = segment_content(result.text) if isinstance(result, TextResult) else []
        self.is_loading = False

    def attach_related_topics(self, task: "asyncio.Task[RelatedTopicsResult]") -> None:
        self._related_task = task

    # -----------------------------------------------------------------------
    # RELATED TOPICS
    # -----------------------------------------------------------------------

    @property
    def related_topics_requested(self) -> bool:
        return self._related_task is not None

    @property
    def related_topics_loading(self) -> bool:
        return self._related_task is not None and not self._related_task.done()

    @property
    def related_topics(self) -> Optional[RelatedTopicsResult]:
        """Finished follow-up result, or None while pending / never requested."""
        if self._related_task is None or not self._related_task.done():
            return None
        if self._related_task.cancelled():
            return RelatedTopicsResult(error="Related topics request was cancelled.")
        return self._related_task.result()

    async def wait_for_related_topics(self) -> Optional[RelatedTopicsResult]:
        if self._related_task is None:
            return None
        await asyncio.wait({self._related_task})
        return self.related_topics

    # -----------------------------------------------------------------------
    # OUTPUT LOOKUP
    # -----------------------------------------------------------------------

    def find_segment(self, segment_id: str) -> Optional[ContentSegment]:
        for segment in self.segments:
            if segment.id == segment_id:
                return segment
        return None


class SessionRegistry:
    """In-memory map of username -> WriterSession."""

    def __init__(self):
        self._sessions: Dict[str, WriterSession] = {}

    def get(self, username: str) -> WriterSession:
        session = self._sessions.get(username)
        if session is None:
            session = WriterSession(username=username)
            self._sessions[username] = session
            logger.debug(f"Created writer session for {username}")
        return session

    def discard(self, username: str) -> None:
        self._sessions.pop(username, None)

    def __contains__(self, username: str) -> bool:
        return username in self._sessions

    def clear(self) -> None:
        self._sessions.clear()


session_registry = SessionRegistry()
