"""
Tests for the content segmenter.

This module tests:
- Basic prose / code partitioning
- Fence edge cases (unterminated, empty body, bad tags, mid-line fences)
- Segment IDs
- Reconstruction of the source text from its segments
"""

import pytest

from app.ai.output.segmenter import (
    ContentSegment,
    SegmentKind,
    find_fences,
    segment_content,
    split_paragraphs,
)


def reconstruct(segments):
    """Re-join segments with fence syntax (valid when code bodies are already trimmed)."""
    parts = []
    for segment in segments:
        if segment.kind is SegmentKind.CODE:
            parts.append(f"```{segment.language or ''}\n{segment.text}\n```")
        else:
            parts.append(segment.text)
    return "".join(parts)


class TestBasicSegmentation:

    def test_empty_input(self):
        assert segment_content("") == []

    def test_plain_text_is_single_prose_segment(self):
        segments = segment_content("no fences here")
        assert segments == [ContentSegment(id="text-0", kind=SegmentKind.PROSE, text="no fences here")]

    def test_prose_code_prose(self):
        segments = segment_content("a\n```js\nconsole.log(1)\n```\nb")

        assert [s.kind for s in segments] == [SegmentKind.PROSE, SegmentKind.CODE, SegmentKind.PROSE]
        assert segments[0].text == "a\n"
        assert segments[1].text == "console.log(1)"
        assert segments[1].language == "js"
        assert segments[2].text == "\nb"

    def test_code_only(self):
        segments = segment_content("```python\nprint('hi')\n```")
        assert len(segments) == 1
        assert segments[0].kind is SegmentKind.CODE
        assert segments[0].language == "python"

    def test_missing_language_is_none(self):
        segments = segment_content("```\nls -la\n```")
        assert segments[0].language is None

    def test_code_body_is_trimmed(self):
        segments = segment_content("```\n\n   x = 1   \n\n```")
        assert segments[0].text == "x = 1"

    def test_prose_kept_verbatim(self):
        text = "  leading spaces\n\n\n```sh\necho\n```\ntrailing   \n"
        segments = segment_content(text)
        assert segments[0].text == "  leading spaces\n\n\n"
        assert segments[-1].text == "\ntrailing   \n"

    def test_multiline_body(self):
        body = "def f():\n    return 1\n\nprint(f())"
        segments = segment_content(f"```python\n{body}\n```")
        assert segments[0].text == body


class TestFenceEdgeCases:

    def test_unterminated_fence_stays_prose(self):
        text = "intro\n```python\nprint(1)\n"
        assert segment_content(text) == [
            ContentSegment(id="text-0", kind=SegmentKind.PROSE, text=text)
        ]

    def test_empty_fence_pair_is_not_code(self):
        text = "```\n```"
        segments = segment_content(text)
        assert len(segments) == 1
        assert segments[0].kind is SegmentKind.PROSE
        assert segments[0].text == text

    def test_blank_body_line_is_code(self):
        segments = segment_content("```\n\n```")
        assert len(segments) == 1
        assert segments[0].kind is SegmentKind.CODE
        assert segments[0].text == ""

    def test_tag_with_non_word_characters_is_not_a_fence(self):
        text = "```objective-c\n[obj run];\n```"
        segments = segment_content(text)
        assert [s.kind for s in segments] == [SegmentKind.PROSE]

    def test_opening_fence_needs_newline(self):
        text = "inline ```code``` here"
        assert segment_content(text)[0].text == text

    def test_fence_may_start_mid_line(self):
        segments = segment_content("see ```py\nx = 1\n```")
        assert segments[0].text == "see "
        assert segments[1].language == "py"

    def test_closing_fence_is_minimal(self):
        text = "```\na\n```\nmid\n```\nb\n```"
        segments = segment_content(text)
        assert [s.kind for s in segments] == [SegmentKind.CODE, SegmentKind.PROSE, SegmentKind.CODE]
        assert segments[0].text == "a"
        assert segments[1].text == "\nmid\n"
        assert segments[2].text == "b"

    def test_adjacent_blocks(self):
        segments = segment_content("```a\nx\n```\n```b\ny\n```")
        assert [(s.kind, s.language, s.text) for s in segments] == [
            (SegmentKind.CODE, "a", "x"),
            (SegmentKind.PROSE, None, "\n"),
            (SegmentKind.CODE, "b", "y"),
        ]

    def test_text_after_closing_backticks_on_same_line(self):
        segments = segment_content("```\nx\n```python trailing")
        assert segments[0].kind is SegmentKind.CODE
        assert segments[1].text == "python trailing"

    def test_unterminated_after_valid_block(self):
        text = "```\nok\n```\nthen ```js\nnever closed"
        segments = segment_content(text)
        assert [s.kind for s in segments] == [SegmentKind.CODE, SegmentKind.PROSE]
        assert segments[1].text == "\nthen ```js\nnever closed"

    def test_find_fences_positions(self):
        text = "ab```x\ny\n```cd"
        (match,) = find_fences(text)
        assert (match.start, match.end) == (2, 12)
        assert text[match.end:] == "cd"


class TestSegmentIds:

    def test_ids_follow_source_order(self):
        segments = segment_content("p\n```\nc\n```\nq")
        assert [s.id for s in segments] == ["text-0", "code-1", "text-2"]

    def test_ids_unique(self):
        text = "\n".join(["para", "```\none\n```", "para", "```\ntwo\n```", "end"])
        ids = [s.id for s in segment_content(text)]
        assert len(ids) == len(set(ids))

    def test_regeneration_is_identical(self):
        text = "x\n```js\n1\n```\ny"
        assert segment_content(text) == segment_content(text)


class TestReconstruction:

    @pytest.mark.parametrize("text", [
        "",
        "just prose",
        "a\n```js\nconsole.log(1)\n```\nb",
        "```\nonly code\n```",
        "one\n```py\nx\n```\ntwo\n```\ny\n```\nthree",
        "unterminated ```js\nstill prose",
        "```\n```",
    ])
    def test_segments_reproduce_source(self, text):
        assert reconstruct(segment_content(text)) == text


class TestSegmentHelpers:

    def test_to_dict(self):
        segment = ContentSegment(id="code-1", kind=SegmentKind.CODE, text="x", language="py")
        assert segment.to_dict() == {"id": "code-1", "type": "code", "content": "x", "language": "py"}

    def test_split_paragraphs(self):
        segment = ContentSegment(id="text-0", kind=SegmentKind.PROSE, text="one\n\ntwo")
        assert split_paragraphs(segment) == ("one", "", "two")
