"""
API utility functions for response formatting.

Success bodies are the TranscriptionResult itself; every failure uses:
{
    "error": str    # Human-readable message
}
"""

from typing import Any, Dict

from fastapi.responses import JSONResponse

from models.schemas import NormalizedError


def error_response(message: str) -> Dict[str, Any]:
    """
    Create an error response dictionary.

    Example:
        >>> error_response("API key is required.")
        {"error": "API key is required."}
    """
    return {"error": message}


def json_error_response(message: str, status_code: int = 500) -> JSONResponse:
    """
    Create a JSONResponse with the error format.

    Args:
        message: Error message
        status_code: HTTP status code

    Returns:
        JSONResponse with {"error": message}
    """
    return JSONResponse(status_code=status_code, content=error_response(message))


def normalized_error_response(error: NormalizedError) -> JSONResponse:
    """JSONResponse for an already normalized error."""
    return json_error_response(error.message, status_code=error.status)
