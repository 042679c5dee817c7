"""
Content Router - API endpoints for generation and output actions.

HTTP handling only; all generation logic lives in GenerationService and the
per-user state in WriterSession.

┌──────────────────┐
│ POST /generate   │──► GenerationService.run(session, request)
└──────────────────┘            │
                                ├──► GenerationResult stored in session
                                └──► related topics task (background)
┌──────────────────┐
│ GET /result      │──► last result + segments + copy flags
│ GET /related-... │──► follow-up state (optionally awaited)
│ POST /copy       │──► segment text + "copied" indicator
│ GET /image       │──► last image as a file download
└──────────────────┘
"""

import logging
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import Response

from app.ai.output.copy_tracker import COPY_ALL_ID
from app.ai.output.download import build_download_filename, decode_data_url
from app.ai.output.segmenter import ContentSegment, SegmentKind, split_paragraphs
from app.ai.prompts.content_prompts import get_placeholder
from app.ai.schemas.generation import (
    DEFAULT_GENERATION_MODE,
    DEFAULT_WRITING_TONE,
    Failure,
    GenerationMode,
    GenerationRequest,
    ImageResult,
    TextResult,
    WritingTone,
)
from app.deps import get_current_username, get_generation_service, get_writer_session
from app.schemas.content import (
    CopyOut,
    CopyRequest,
    ErrorOut,
    GenerateRequest,
    GenerationOut,
    ImageOut,
    ModeOption,
    OptionsOut,
    RelatedTopicsOut,
    SegmentOut,
)
from app.services.generation_service import GenerationInProgressError, GenerationService
from app.services.writer_session import WriterSession

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/content", tags=["content"])


# ---------------------------------------------------------------------------
# RESPONSE BUILDERS
# ---------------------------------------------------------------------------

def _segment_out(segment: ContentSegment, session: WriterSession) -> SegmentOut:
    return SegmentOut(
        id=segment.id,
        type=segment.kind.value,
        content=segment.text,
        language=segment.language,
        paragraphs=list(split_paragraphs(segment)) if segment.kind is SegmentKind.PROSE else [],
        copied=session.copy_tracker.is_copied(segment.id),
    )


def _generation_out(session: WriterSession) -> GenerationOut:
    request = session.request
    result = session.result
    base = dict(
        mode=request.mode,
        tone=request.tone,
        related_topics_requested=session.related_topics_requested,
    )

    if isinstance(result, TextResult):
        return GenerationOut(
            status="text",
            text=result.text,
            all_copied=session.copy_tracker.is_copied(COPY_ALL_ID),
            segments=[_segment_out(s, session) for s in session.segments],
            **base,
        )
    if isinstance(result, ImageResult):
        return GenerationOut(
            status="image",
            image=ImageOut(
                data_url=result.data_url,
                alt_text=result.alt_text,
                filename=build_download_filename(result.alt_text),
            ),
            **base,
        )
    return GenerationOut(
        status="error",
        error=ErrorOut(message=result.message, kind=result.kind),
        **base,
    )


# ---------------------------------------------------------------------------
# GET /content/options - Modes, tones and input placeholders
# ---------------------------------------------------------------------------
@router.get("/options", response_model=OptionsOut)
def get_options():
    return OptionsOut(
        modes=[
            ModeOption(value=mode, placeholder=get_placeholder(mode), uses_tone=not mode.is_image)
            for mode in GenerationMode
        ],
        tones=list(WritingTone),
        default_mode=DEFAULT_GENERATION_MODE,
        default_tone=DEFAULT_WRITING_TONE,
    )


# ---------------------------------------------------------------------------
# POST /content/generate - Run a generation
# ---------------------------------------------------------------------------
@router.post("/generate", response_model=GenerationOut)
async def generate(
    payload: GenerateRequest,
    session: WriterSession = Depends(get_writer_session),
    service: GenerationService = Depends(get_generation_service),
):
    """
    Generate text or an image and store it as the session's current output.

    Failures (empty input, bad key, quota...) are returned as status="error"
    with a 200, since they are a normal outcome shown in the output area.

    Raises:
        409 Conflict: A generation is already running for this user
    """
    request = GenerationRequest(raw_input=payload.prompt, mode=payload.mode, tone=payload.tone)

    try:
        result = await service.run(session, request)
    except GenerationInProgressError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    if isinstance(result, Failure):
        logger.info(f"Generation failed for {session.username}: {result.kind.value}")

    return _generation_out(session)


# ---------------------------------------------------------------------------
# GET /content/result - Last output
# ---------------------------------------------------------------------------
@router.get("/result", response_model=GenerationOut)
def get_result(session: WriterSession = Depends(get_writer_session)):
    if session.result is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Nothing generated yet")
    return _generation_out(session)


# ---------------------------------------------------------------------------
# GET /content/related-topics - Follow-up suggestions
# ---------------------------------------------------------------------------
@router.get("/related-topics", response_model=RelatedTopicsOut)
async def get_related_topics(
    wait: bool = Query(False, description="Block until the follow-up finishes"),
    session: WriterSession = Depends(get_writer_session),
):
    if not session.related_topics_requested:
        return RelatedTopicsOut(status="idle")

    if wait:
        await session.wait_for_related_topics()

    related = session.related_topics
    if related is None:
        return RelatedTopicsOut(status="loading")
    if not related.success:
        return RelatedTopicsOut(status="error", error=related.error)
    return RelatedTopicsOut(status="ready", topics=list(related.topics))


# ---------------------------------------------------------------------------
# POST /content/copy - Copy a segment (or everything)
# ---------------------------------------------------------------------------
@router.post("/copy", response_model=CopyOut)
def copy_content(payload: CopyRequest, session: WriterSession = Depends(get_writer_session)):
    """
    Return the text to put on the clipboard and light its "copied" indicator.

    Raises:
        404 Not Found: No text output, or unknown segment id
    """
    if not isinstance(session.result, TextResult):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No text to copy")

    if payload.segment_id is None:
        text = session.result.text
        session.copy_tracker.mark(COPY_ALL_ID)
    else:
        segment = session.find_segment(payload.segment_id)
        if segment is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unknown segment")
        text = segment.text
        session.copy_tracker.mark(segment.id)

    return CopyOut(
        segment_id=payload.segment_id,
        text=text,
        expires_in_seconds=session.copy_tracker.ttl_seconds,
    )


# ---------------------------------------------------------------------------
# GET /content/image - Download the last image
# ---------------------------------------------------------------------------
@router.get("/image")
def download_image(session: WriterSession = Depends(get_writer_session)):
    if not isinstance(session.result, ImageResult):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No image to download")

    try:
        mime_type, payload = decode_data_url(session.result.data_url)
    except ValueError as e:
        logger.error(f"Stored image for {session.username} is unreadable: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    filename = build_download_filename(session.result.alt_text)
    return Response(
        content=payload,
        media_type=mime_type,
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(filename)}"},
    )


# ---------------------------------------------------------------------------
# GET /content/stats - AI usage metrics
# ---------------------------------------------------------------------------
@router.get("/stats")
def get_stats(
    username: str = Depends(get_current_username),
    service: GenerationService = Depends(get_generation_service),
):
    return service.monitor.get_stats().to_dict()
