"""Centralized error and log message templates for transcription processing."""


class ErrorMessages:
    """Centralized error message templates."""

    # Request validation
    PROVIDER_INVALID = "Choose either OpenAI or ElevenLabs."
    API_KEY_REQUIRED = "API key is required."
    SOURCE_REQUIRED = "Upload a media file or provide a YouTube URL."
    YOUTUBE_URL_INVALID = "Invalid YouTube URL."
    YOUTUBE_TOO_LARGE = "YouTube audio exceeds the {limit_mb} MB limit."

    # Limits
    PROVIDER_FILE_TOO_LARGE = (
        "{provider} transcription supports files up to {limit_mb} MB. "
        "Use a shorter clip or switch to {alternate}."
    )
    UPLOAD_TOO_LARGE = "Uploaded file exceeds the {limit_mb} MB limit."

    # Results
    EMPTY_RESULT = "Transcription API returned an empty result."
    UNEXPECTED = "Unexpected transcription error."

    # Boundary
    METHOD_NOT_ALLOWED = "Method not allowed."
    NOT_FOUND = "Not found."


class LogMessages:
    """Centralized log message templates."""

    # Initialization
    INIT_SERVICE = (
        "TranscribeService initialized (resolver={resolver}, providers={providers})"
    )
    INIT_HTTP_CLIENT = "Created ElevenLabs HTTP client with connection pooling"
    TEMP_DIR_READY = "Temp directory ready: {path}"

    # Orchestration
    REQUEST_START = (
        "Transcription request: provider={provider}, model={model}, "
        "source={kind}, label={label}"
    )
    REQUEST_FILE_SIZE = "Resolved media size: {size:.2f}MB ({path})"
    REQUEST_COMPLETE = (
        "Transcription complete: provider={provider}, {chars} chars in {duration:.2f}s"
    )
    REQUEST_REJECTED = "Transcription rejected ({status}): {message}"
    REQUEST_FAILED = "Transcription failed: {error}"

    # YouTube download
    YOUTUBE_PROBING = "Probing YouTube audio: {url}"
    YOUTUBE_SIZE_UNKNOWN = "YouTube audio size unknown, downloading anyway"
    YOUTUBE_TOO_LARGE = "YouTube audio too large: {size:.2f}MB > {limit:.2f}MB"
    YOUTUBE_DOWNLOADING = "Downloading YouTube audio to {destination}"
    YOUTUBE_DOWNLOADED = "Downloaded {size:.2f}MB in {duration:.2f}s to {destination}"
    YOUTUBE_DOWNLOAD_FAILED = "YouTube download failed: {error}"

    # Providers
    PROVIDER_CALL = "Calling {provider} speech-to-text (model={model})"
    PROVIDER_HTTP_ERROR = "{provider} responded with HTTP {status}"

    # Cleanup
    CLEANUP_DONE = "Removed temp file: {path}"
    CLEANUP_FAILED = "Failed to clean up temp file {path}: {error}"

    # Upload
    UPLOAD_STORED = "Stored upload '{name}' ({size:.2f}MB) at {path}"
    UPLOAD_TOO_LARGE = "Upload '{name}' exceeded {limit}MB, aborting"
