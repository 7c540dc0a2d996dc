"""Text extraction from uploaded documents."""

from dataclasses import dataclass

# Document types accepted for knowledge ingestion
ALLOWED_EXTENSIONS = {".pdf", ".txt", ".docx"}

ALLOWED_CONTENT_TYPES = {
    "application/pdf",
    "text/plain",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


@dataclass
class FileTextResult:
    """Result of text extraction from a file."""

    text: str
    detected_encoding: str
    file_type: str


def get_extension(filename: str) -> str:
    """Lowercase file extension including the dot, or "" when there is none."""
    if "." in filename:
        return "." + filename.rsplit(".", 1)[-1].lower()
    return ""


def is_supported_upload(filename: str, content_type: str | None) -> bool:
    """True when either the extension or the MIME type is an accepted document type."""
    if get_extension(filename) in ALLOWED_EXTENSIONS:
        return True
    if content_type and content_type.split(";")[0].strip().lower() in ALLOWED_CONTENT_TYPES:
        return True
    return False


def _decode_bytes(raw_bytes: bytes) -> tuple[str, str]:
    """
    Decode bytes with the UTF-8-BOM, UTF-8, Latin-1 fallback chain.

    Returns:
        Tuple of (decoded_text, encoding_name)
    """
    if raw_bytes.startswith(b"\xef\xbb\xbf"):
        return raw_bytes.decode("utf-8-sig"), "utf-8-sig"

    try:
        return raw_bytes.decode("utf-8"), "utf-8"
    except UnicodeDecodeError:
        # Latin-1 maps every byte, so this never fails
        return raw_bytes.decode("latin-1"), "latin-1"


def extract_text_from_upload(
    filename: str,
    content_type: str | None,
    raw_bytes: bytes,
) -> FileTextResult:
    """
    Extract text content from an uploaded document.

    PDF and DOCX bodies are decoded as raw text; no layout-aware parsing is done.

    Args:
        filename: Original filename
        content_type: MIME content type (may be None)
        raw_bytes: Raw file bytes

    Returns:
        FileTextResult with the decoded text, encoding and normalized file type

    Raises:
        ValueError: If the file type is not supported
    """
    if not is_supported_upload(filename, content_type):
        allowed = ", ".join(sorted(ALLOWED_EXTENSIONS))
        raise ValueError(f"Unsupported file type. Allowed extensions: {allowed}")

    file_type = get_extension(filename).lstrip(".") or (content_type or "").split(";")[0].strip()
    text, encoding = _decode_bytes(raw_bytes)
    # NUL bytes from binary formats cannot be stored in text columns
    text = text.replace("\x00", "")
    return FileTextResult(text=text, detected_encoding=encoding, file_type=file_type)
