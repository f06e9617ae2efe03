from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
import logging

from schemas.transcript import ErrorResponse, TranscriptResponse
from services.transcript_service import RetrievalStatus, TranscriptService, utc_now_iso

router = APIRouter()
logger = logging.getLogger(__name__)

USAGE_EXAMPLE = "/transcript?videoId=dQw4w9WgXcQ"


def get_transcript_service(request: Request) -> TranscriptService:
    return request.app.state.transcript_service


@router.get(
    "/transcript",
    response_model=TranscriptResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def get_transcript(
    videoId: Optional[str] = Query(None, description="The ID of the YouTube video"),
    service: TranscriptService = Depends(get_transcript_service),
):
    """
    Fetch the English captions of a YouTube video as timestamped lines.

    Returns:
        TranscriptResponse with the video ID, caption lines in source order
        and the time the response was generated
    """
    if not videoId:
        return JSONResponse(
            status_code=400,
            content={"error": "Video ID is required", "example": USAGE_EXAMPLE},
        )

    logger.info(f"Fetching transcript for video: {videoId}")

    # youtube-transcript-api is blocking; keep it off the event loop
    result = await run_in_threadpool(service.retrieve, videoId)

    if result.status == RetrievalStatus.NOT_FOUND:
        logger.error(f"English transcript not found for video {videoId}: {result.detail}")
        return JSONResponse(
            status_code=404,
            content={"error": "English transcript not found for this video", "videoId": videoId},
        )

    if result.status == RetrievalStatus.FAILED:
        logger.error(f"Error fetching transcript for video {videoId}: {result.detail}")
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to fetch transcript", "videoId": videoId},
        )

    return TranscriptResponse(
        videoId=videoId,
        transcript=result.entries,
        timestamp=utc_now_iso(),
    )
