"""
Content Segmenter - Split generated text into prose and fenced-code segments.

Models frequently answer with Markdown that mixes paragraphs and fenced code
blocks. The client renders the two differently (plain paragraphs vs. a
language-tagged, copyable code block), so the raw text is partitioned into an
ordered list of ContentSegment values.

Fence Grammar:
==============
    ```<tag>\\n<body>\\n```

- <tag> is a run of ASCII word characters, possibly empty
- <body> is everything up to the FIRST "\\n```" after the opening line
- an opening fence with no closing "\\n```" is not a fence (stays prose)
- "```\\n```" has no body line and is not a fence either

The scanner is a small explicit state machine (SEEK_OPEN -> READ_TAG ->
READ_BODY) instead of a backtracking regex.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

FENCE = "```"
CLOSE_FENCE = "\n" + FENCE

_WORD_CHARS = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_"
)


class SegmentKind(str, Enum):
    PROSE = "text"
    CODE = "code"


@dataclass(frozen=True)
class ContentSegment:
    """
    One piece of generated output.

    Attributes:
        id: Unique within one segmentation call, order-stable ("text-0", "code-1")
        kind: PROSE or CODE
        text: Prose verbatim, or the code body with surrounding whitespace trimmed
        language: Fence language tag for CODE segments, None when absent
    """
    id: str
    kind: SegmentKind
    text: str
    language: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.kind.value,
            "content": self.text,
            "language": self.language,
        }


@dataclass(frozen=True)
class _FenceMatch:
    start: int
    end: int
    language: str
    body: str


class _ScanState(str, Enum):
    SEEK_OPEN = "seek_open"
    READ_TAG = "read_tag"
    READ_BODY = "read_body"


def _match_fence_at(text: str, start: int) -> Optional[_FenceMatch]:
    """
    Try to read a complete fenced block whose opening backticks are at `start`.

    Returns None when the fence is malformed or never closed.
    """
    state = _ScanState.READ_TAG
    pos = start + len(FENCE)
    tag_start = pos

    while state is not _ScanState.SEEK_OPEN:
        if state is _ScanState.READ_TAG:
            while pos < len(text) and text[pos] in _WORD_CHARS:
                pos += 1
            if pos >= len(text) or text[pos] != "\n":
                return None
            language = text[tag_start:pos]
            pos += 1
            state = _ScanState.READ_BODY

        elif state is _ScanState.READ_BODY:
            # The body's trailing newline belongs to the close fence, so the
            # search starts at the first body character (empty body allowed
            # only when that newline is present).
            close = text.find(CLOSE_FENCE, pos)
            if close == -1:
                return None
            return _FenceMatch(
                start=start,
                end=close + len(CLOSE_FENCE),
                language=language,
                body=text[pos:close],
            )

    return None


def find_fences(text: str) -> List[_FenceMatch]:
    """Scan left to right for non-overlapping fenced blocks."""
    matches = []
    cursor = 0

    candidate = text.find(FENCE, cursor)
    while candidate != -1:
        match = _match_fence_at(text, candidate)
        if match is None:
            candidate = text.find(FENCE, candidate + 1)
            continue
        matches.append(match)
        cursor = match.end
        candidate = text.find(FENCE, cursor)

    return matches


def segment_content(text: str) -> List[ContentSegment]:
    """
    Partition generated text into ordered prose and code segments.

    Args:
        text: Raw model output

    Returns:
        Segments in source order; empty list for empty input.

    Example:
        >>> [s.kind.value for s in segment_content("a\\n```js\\nx()\\n```\\nb")]
        ['text', 'code', 'text']
    """
    segments: List[ContentSegment] = []
    counter = 0
    last_index = 0

    def next_id(prefix: str) -> str:
        nonlocal counter
        segment_id = f"{prefix}-{counter}"
        counter += 1
        return segment_id

    for match in find_fences(text):
        if match.start > last_index:
            segments.append(ContentSegment(
                id=next_id("text"),
                kind=SegmentKind.PROSE,
                text=text[last_index:match.start],
            ))
        segments.append(ContentSegment(
            id=next_id("code"),
            kind=SegmentKind.CODE,
            text=match.body.strip(),
            language=match.language or None,
        ))
        last_index = match.end

    if last_index < len(text):
        segments.append(ContentSegment(
            id=next_id("text"),
            kind=SegmentKind.PROSE,
            text=text[last_index:],
        ))

    return segments


def split_paragraphs(segment: ContentSegment) -> Tuple[str, ...]:
    """Lines of a prose segment, as the client renders them (one per paragraph)."""
    return tuple(segment.text.split("\n"))
