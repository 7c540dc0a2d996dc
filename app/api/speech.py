"""API endpoint for text-to-speech."""

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from pydantic import BaseModel

from app.api.dependencies import get_speech_client
from app.core.logging import get_logger
from app.core.speech import SpeechClient

logger = get_logger(__name__)

router = APIRouter()


class SpeechRequest(BaseModel):
    """Request body for speech synthesis."""

    text: str = ""
    language: str = "it"


@router.post("/speech")
async def synthesize_speech(
    request: SpeechRequest,
    speech: SpeechClient = Depends(get_speech_client),
) -> Response:
    """
    Synthesize a guide reply to MP3.

    Raises:
        HTTPException 400: If text is empty
        HTTPException 502: If the speech provider fails
    """
    if not request.text.strip():
        raise HTTPException(status_code=400, detail="Text is required")

    try:
        audio = await speech.synthesize_async(request.text, request.language)
    except Exception as e:
        logger.error(f"Speech synthesis failed: {e}", exc_info=True)
        raise HTTPException(status_code=502, detail="Speech synthesis failed")

    return Response(
        content=audio,
        media_type="audio/mpeg",
        headers={"Cache-Control": "no-cache"},
    )
