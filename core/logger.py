"""
Centralized logging configuration using Loguru.
Follows Single Responsibility Principle - only handles logging setup.

Features:
- Structured logging with Loguru
- Standard library logging interception (routes stdlib logging to Loguru)
- Third-party library logger configuration (httpx, openai, uvicorn)
- yt-dlp logger adapter
- JSON logging format option for production
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

from loguru import logger  # type: ignore


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


# =============================================================================
# Standard Library Logging Interception
# =============================================================================


class InterceptHandler(logging.Handler):
    """
    Intercept standard library logging and route to Loguru.

    uvicorn, httpx and the openai SDK log through stdlib logging; this keeps
    their output in the same sinks and format as application logs.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where logging call originated
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def intercept_standard_logging() -> None:
    """Route Python standard library logging to Loguru."""
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)


def configure_third_party_loggers() -> None:
    """
    Configure third-party library loggers to reduce noise.

    httpx/httpcore log every request line at INFO, and the openai SDK logs
    request options at DEBUG, which would include headers.
    """
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)

    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("uvicorn.access").setLevel(logging.INFO)
    logging.getLogger("uvicorn.error").setLevel(logging.INFO)

    logging.getLogger("fastapi").setLevel(logging.INFO)


# =============================================================================
# yt-dlp Adapter
# =============================================================================


class YtDlpLogger:
    """
    Logger object accepted by yt_dlp.YoutubeDL(params={"logger": ...}).

    yt-dlp sends both debug and info lines to debug(); info lines are
    prefixed with "[debug] " only when they really are debug output.
    """

    def debug(self, msg: str) -> None:
        if msg.startswith("[debug] "):
            logger.debug(msg)
        else:
            self.info(msg)

    def info(self, msg: str) -> None:
        logger.info(msg)

    def warning(self, msg: str) -> None:
        logger.warning(msg)

    def error(self, msg: str) -> None:
        logger.error(msg)


def format_exception_short(exception: Exception, context: Optional[str] = None) -> str:
    """
    Format exception to be short and readable.

    Args:
        exception: Exception object
        context: Optional context message

    Returns:
        Short formatted error message

    Example:
        >>> try:
        ...     raise ValueError("Invalid input")
        ... except ValueError as e:
        ...     print(format_exception_short(e, "Downloading audio"))
        Downloading audio | ValueError: Invalid input | (source_resolver.py:123)
    """
    try:
        exc_type = type(exception).__name__

        # Last frame is where the error actually occurred
        tb = exception.__traceback__
        if tb:
            while tb.tb_next:
                tb = tb.tb_next
            location = f"{Path(tb.tb_frame.f_code.co_filename).name}:{tb.tb_lineno}"
        else:
            location = "unknown"

        parts = []
        if context:
            parts.append(context)
        parts.append(f"{exc_type}: {exception}")
        parts.append(f"({location})")

        return " | ".join(parts)

    except Exception:
        return f"{type(exception).__name__}: {str(exception)}"


# =============================================================================
# JSON Logging Format
# =============================================================================


def serialize_log_record(record: dict) -> str:
    """
    Serialize log record to a flat JSON dictionary.

    Args:
        record: Loguru record dictionary

    Returns:
        JSON string representation of the log record, escaped for Loguru's
        format() pass
    """
    log_record = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "message": record["message"],
        "module": record["module"],
        "function": record["function"],
        "line": record["line"],
    }

    if record.get("exception"):
        exception = record["exception"]
        log_record["exception"] = {
            "type": exception.type.__name__ if exception.type else "Unknown",
            "message": str(exception.value),
        }

    # Context bound via logger.bind()
    if record.get("extra"):
        for key, value in record["extra"].items():
            try:
                json.dumps(value)
                log_record[key] = value
            except (TypeError, OverflowError):
                log_record[key] = str(value)

    return (
        json.dumps(log_record).replace("{", "{{").replace("}", "}}").replace("<", "\\<")
        + "\n"
    )


# =============================================================================
# Setup
# =============================================================================


def _resolve_level(level: Optional[str], debug: bool) -> str:
    if level:
        level = level.upper()
        return level if level in LOG_LEVELS else "INFO"
    return "DEBUG" if debug else "INFO"


def setup_logger() -> None:
    """
    Configure logger handlers for the application.

    Only configures once even if called multiple times. Console (colored) or
    JSON output is chosen by LOG_FORMAT; file sinks by LOG_FILE_ENABLED.
    """
    from .config import get_settings

    settings = get_settings()
    log_level = _resolve_level(settings.log_level, settings.debug)
    json_format = settings.log_format.lower() == "json"

    if getattr(setup_logger, "_configured", False):
        return

    logger.remove()

    if json_format:
        logger.add(
            sys.stdout, format=serialize_log_record, level=log_level, colorize=False
        )
    else:
        logger.add(sys.stdout, colorize=True, format=CONSOLE_FORMAT, level=log_level)

    if settings.log_file_enabled:
        log_dir = Path("logs")
        log_dir.mkdir(exist_ok=True)
        suffix = ".json.log" if json_format else ".log"
        file_format = serialize_log_record if json_format else FILE_FORMAT

        for name, level in (("app", "DEBUG"), ("error", "ERROR")):
            logger.add(
                log_dir / f"{name}{suffix}",
                rotation="100 MB",
                retention="30 days",
                compression="zip",
                format=file_format,
                level=level,
                colorize=False,
            )

    intercept_standard_logging()
    configure_third_party_loggers()
    setup_logger._configured = True


# Configure logger on module import
setup_logger()

__all__ = [
    "logger",
    "format_exception_short",
    "configure_third_party_loggers",
    "intercept_standard_logging",
    "serialize_log_record",
    "setup_logger",
    "InterceptHandler",
    "YtDlpLogger",
]
