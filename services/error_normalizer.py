"""
Error Normalizer - Maps any failure to a (status, message) pair.

Pipeline errors carry their own status and message. Everything else
(openai SDK errors, httpx errors, yt-dlp errors, plain exceptions) is inspected
through an ordered chain of message extractors, because OpenAI, ElevenLabs and
network failures each shape their error bodies differently.
"""

from typing import Any, Callable, Optional, Tuple

from core.constants import DEFAULT_ERROR_STATUS, MAX_ERROR_STATUS, MIN_ERROR_STATUS
from core.errors import TranscriptionError
from core.messages import ErrorMessages
from models.schemas import NormalizedError


def _response_of(error: BaseException) -> Any:
    return getattr(error, "response", None)


def _coerce_status(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def upstream_status(error: BaseException) -> int:
    """HTTP status reported by the error or its response, clamped to [400, 599]."""
    status = _coerce_status(getattr(error, "status_code", None))
    if status is None:
        status = _coerce_status(getattr(error, "status", None))
    if status is None:
        status = _coerce_status(getattr(_response_of(error), "status_code", None))

    if status is None or not MIN_ERROR_STATUS <= status <= MAX_ERROR_STATUS:
        return DEFAULT_ERROR_STATUS
    return status


def response_payload(error: BaseException) -> Any:
    """Parsed JSON body of the upstream response, or None."""
    response = _response_of(error)
    if response is not None:
        try:
            return response.json()
        except (ValueError, AttributeError, TypeError):
            pass
    # openai SDK errors keep the decoded body even when the response is gone
    return getattr(error, "body", None)


def _text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _error_message(payload: Any, error: BaseException) -> Optional[str]:
    if isinstance(payload, dict) and isinstance(payload.get("error"), dict):
        return _text(payload["error"].get("message"))
    return None


def _message(payload: Any, error: BaseException) -> Optional[str]:
    if isinstance(payload, dict):
        return _text(payload.get("message"))
    return None


def _detail(payload: Any, error: BaseException) -> Optional[str]:
    if not isinstance(payload, dict):
        return None
    detail = payload.get("detail")
    # ElevenLabs: {"detail": {"status": "...", "message": "..."}}
    if isinstance(detail, dict):
        return _text(detail.get("message"))
    return _text(detail)


def _exception_message(payload: Any, error: BaseException) -> Optional[str]:
    return _text(getattr(error, "message", None)) or _text(str(error))


MESSAGE_EXTRACTORS: Tuple[Callable[[Any, BaseException], Optional[str]], ...] = (
    _error_message,
    _message,
    _detail,
    _exception_message,
)


def normalize_error(error: BaseException) -> NormalizedError:
    """
    Convert any exception into the boundary error contract.

    Args:
        error: Exception raised while handling a transcription request

    Returns:
        NormalizedError with status in [400, 599] and a non-empty message
    """
    if isinstance(error, TranscriptionError):
        return NormalizedError(status=error.status_code, message=error.message)

    payload = response_payload(error)
    message = next(
        (
            text
            for text in (extract(payload, error) for extract in MESSAGE_EXTRACTORS)
            if text
        ),
        ErrorMessages.UNEXPECTED,
    )
    return NormalizedError(status=upstream_status(error), message=message)
