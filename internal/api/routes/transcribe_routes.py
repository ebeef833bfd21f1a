"""
Transcription Routes - API endpoint for synchronous media transcription.

Success body is the TranscriptionResult:
{
    "transcript": str,
    "provider": str,
    "model": str,
    "source": {"kind": "file" | "youtube", "label": str}
}

Failures use {"error": str} with the normalized status code.
"""

from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import JSONResponse

from core.constants import UPLOAD_COPY_CHUNK_SIZE
from core.dependencies import get_transcribe_service_dependency
from core.errors import PayloadTooLargeError
from core.logger import logger
from core.messages import ErrorMessages, LogMessages
from core.temp_files import (
    cleanup_file,
    create_temp_filename,
    ensure_temp_dir,
    get_max_upload_bytes,
)
from internal.api.schemas.common_schemas import ErrorResponse
from internal.api.utils import normalized_error_response
from models.schemas import TranscriptionRequest, TranscriptionResult
from services.error_normalizer import normalize_error
from services.transcription import TranscribeService

router = APIRouter()


async def store_upload(upload: UploadFile) -> Path:
    """
    Copy a request upload into the temp directory under a unique name.

    Raises:
        PayloadTooLargeError: (413) once more than the upload ceiling was read
    """
    limit = get_max_upload_bytes()
    destination = ensure_temp_dir() / create_temp_filename(upload.filename or "")
    size = 0

    try:
        with open(destination, "wb") as out:
            while True:
                chunk = await upload.read(UPLOAD_COPY_CHUNK_SIZE)
                if not chunk:
                    break
                size += len(chunk)
                if size > limit:
                    limit_mb = limit // (1024 * 1024)
                    logger.warning(
                        LogMessages.UPLOAD_TOO_LARGE.format(
                            name=upload.filename, limit=limit_mb
                        )
                    )
                    raise PayloadTooLargeError(
                        ErrorMessages.UPLOAD_TOO_LARGE.format(limit_mb=limit_mb),
                        status_code=413,
                    )
                out.write(chunk)
    except BaseException:
        cleanup_file(destination)
        raise

    logger.info(
        LogMessages.UPLOAD_STORED.format(
            name=upload.filename, size=size / (1024 * 1024), path=destination
        )
    )
    return destination


@router.post(
    "/api/transcribe",
    response_model=TranscriptionResult,
    tags=["Transcription"],
    summary="Transcribe an uploaded file or a YouTube URL",
    description="""
Transcribe media with OpenAI or ElevenLabs using the caller's API key.

**Form fields** (multipart/form-data):
- `provider`: `openai` or `elevenlabs`
- `apiKey`: provider API key (never stored)
- `model`: optional model override
- `youtubeUrl`: YouTube URL (used when no file is uploaded)
- `media`: audio/video file (max 250 MB; OpenAI accepts up to 25 MB)
""",
    responses={
        200: {"description": "Transcription successful"},
        400: {"model": ErrorResponse, "description": "Invalid input or file too large for provider"},
        413: {"model": ErrorResponse, "description": "Upload exceeds the global limit"},
        500: {"model": ErrorResponse, "description": "Upstream or internal error"},
        502: {"model": ErrorResponse, "description": "Provider returned an empty transcript"},
    },
)
async def transcribe(
    provider: Optional[str] = Form(default=None),
    api_key: Optional[str] = Form(default=None, alias="apiKey"),
    youtube_url: Optional[str] = Form(default=None, alias="youtubeUrl"),
    model: Optional[str] = Form(default=None),
    media: Optional[UploadFile] = File(default=None),
    service: TranscribeService = Depends(get_transcribe_service_dependency),
) -> JSONResponse:
    """Store the upload, run the pipeline, always delete the upload."""
    upload_path: Optional[Path] = None
    has_upload = media is not None and bool(media.filename)

    try:
        if has_upload:
            upload_path = await store_upload(media)

        request = TranscriptionRequest(
            provider=provider,
            api_key=api_key,
            model=model,
            youtube_url=youtube_url,
            file_path=str(upload_path) if upload_path else None,
            file_name=media.filename if has_upload else None,
        )
        result = await service.transcribe(request)

        return JSONResponse(status_code=200, content=result.model_dump(mode="json"))

    except Exception as e:
        error = normalize_error(e)
        logger.error(f"Transcription error ({error.status}): {error.message}")
        return normalized_error_response(error)

    finally:
        cleanup_file(upload_path)
        if media is not None:
            await media.close()
