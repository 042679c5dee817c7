"""
Copy Tracker - Transient "copied" indicators for output segments.

When the user copies a code block (or the whole text), the client shows a
"Copied!" badge for a short time. The tracker records which segment IDs are
currently in that state. Marks expire on their own after `ttl_seconds`;
nothing has to be cancelled.
"""

import time
from typing import Callable, Dict, Optional, Set

from app.core.config import settings

# Segment ID used for the "Copy All" action
COPY_ALL_ID = "__all__"


class CopyTracker:
    """
    Set of segment IDs with a live "copied" indicator.

    Usage:
        tracker = CopyTracker()
        tracker.mark("code-1")
        tracker.is_copied("code-1")  # True for the next 2 seconds
    """

    def __init__(
        self,
        ttl_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = settings.COPY_FEEDBACK_SECONDS if ttl_seconds is None else ttl_seconds
        self._clock = clock
        self._expires_at: Dict[str, float] = {}

    def mark(self, segment_id: str = COPY_ALL_ID) -> None:
        """Turn the indicator on (or restart it) for a segment."""
        self._expires_at[segment_id] = self._clock() + self.ttl_seconds

    def is_copied(self, segment_id: str = COPY_ALL_ID) -> bool:
        expires_at = self._expires_at.get(segment_id)
        if expires_at is None:
            return False
        if self._clock() >= expires_at:
            del self._expires_at[segment_id]
            return False
        return True

    def active(self) -> Set[str]:
        """IDs whose indicator is still on."""
        return {segment_id for segment_id in list(self._expires_at) if self.is_copied(segment_id)}

    def reset(self) -> None:
        self._expires_at.clear()
