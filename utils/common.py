# utils/common.py
"""Common utilities: upload validation, hashing, and path management"""
import hashlib
import logging
import os
from pathlib import Path

# ⚠️ DO NOT import settings here - causes circular import with config.py
# Settings is imported lazily inside functions that need it

def _get_logger():
    """Lazy logger initialization to avoid circular import"""
    from config import settings
    return logging.getLogger(settings.LOGGER_NAME)


# ============= Path Management =============

def get_project_root() -> str:
    """Returns the absolute path to the project's root directory."""
    return os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))


def get_log_file_path() -> str:
    """Creates the log directory if it doesn't exist and returns the full log file path."""
    project_root = get_project_root()
    log_dir = os.path.join(project_root, 'log')

    if not os.path.exists(log_dir):
        os.makedirs(log_dir, exist_ok=True)

    return os.path.join(log_dir, 'docsim.log')


# ============= Upload Validation =============

def validate_text_upload(filename: str, content: bytes) -> str:
    """
    Validate an uploaded text document and return its decoded content.

    Raises ServiceError with INVALID_FORMAT, FILE_TOO_LARGE or NO_TEXT_FOUND.
    """
    from config import settings  # Lazy import
    from core.domain import ErrorCode, ServiceError

    logger = _get_logger()

    if not filename:
        raise ServiceError("No filename provided", ErrorCode.INVALID_FORMAT)

    extension = get_file_extension(filename)
    if extension not in settings.ALLOWED_FILE_EXTENSIONS:
        raise ServiceError(
            f"Unsupported file type. Allowed: {', '.join(settings.ALLOWED_FILE_EXTENSIONS)}",
            ErrorCode.INVALID_FORMAT
        )

    if len(content) > settings.MAX_FILE_SIZE:
        max_mb = settings.MAX_FILE_SIZE // 1024 // 1024
        raise ServiceError(f"File too large. Max size: {max_mb}MB", ErrorCode.FILE_TOO_LARGE)

    try:
        text = content.decode(settings.TEXT_ENCODING)
    except UnicodeDecodeError:
        raise ServiceError(
            f"File is not valid {settings.TEXT_ENCODING} text",
            ErrorCode.INVALID_FORMAT
        )

    if not text:
        raise ServiceError("Uploaded file is empty", ErrorCode.NO_TEXT_FOUND)

    logger.debug(f"Validated upload '{filename}' ({len(content)} bytes)")
    return text


# ============= File Utilities =============

def get_content_hash(content: str) -> str:
    """Calculates the SHA256 hash of text content."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def get_file_extension(filename: str) -> str:
    """Extracts and normalizes the file extension from a filename."""
    return Path(filename).suffix[1:].lower()


def make_snippet(text: str, length: int) -> str:
    """Shortens text for display, adding an ellipsis when truncated."""
    if len(text) <= length:
        return text
    return text[:length] + "..."
